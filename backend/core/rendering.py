from pathlib import Path
from typing import Any, Iterable

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.datastructures import FormData

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / 'templates'

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)


def read_form_fields(form: FormData, names: Iterable[str]) -> dict[str, Any]:
    """Pick named fields out of a submitted form.

    A field sent more than once comes back as a list so schema validation
    rejects it instead of silently keeping one of the values.
    """
    fields: dict[str, Any] = {}
    for name in names:
        values = form.getlist(name)
        if not values:
            fields[name] = None
        elif len(values) == 1:
            fields[name] = values[0]
        else:
            fields[name] = values
    return fields
