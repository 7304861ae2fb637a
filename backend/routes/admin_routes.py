from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from backend.auth.admin import AdminService
from backend.auth.dependencies import get_admin_service, require_admin_session
from backend.auth.sessions import SessionData
from backend.core.errors import AppError
from backend.core.rendering import read_form_fields, render

router = APIRouter(tags=['admin'])


def render_admin(request: Request, admin_service: AdminService, session: SessionData, error=None, status_code=200):
    return render(
        request,
        'admin.html',
        {'session': session, 'users': admin_service.list_users(), 'error': error},
        status_code=status_code,
    )


@router.get('/admin')
def admin_page(
    request: Request,
    session: SessionData = Depends(require_admin_session),
    admin_service: AdminService = Depends(get_admin_service),
):
    return render_admin(request, admin_service, session)


@router.post('/promote')
async def promote(
    request: Request,
    session: SessionData = Depends(require_admin_session),
    admin_service: AdminService = Depends(get_admin_service),
):
    fields = read_form_fields(await request.form(), ('email',))
    try:
        await run_in_threadpool(admin_service.promote, session, fields['email'])
    except AppError as exc:
        return await run_in_threadpool(
            render_admin, request, admin_service, session, exc.message, exc.status_code
        )
    return RedirectResponse(url='/admin', status_code=303)


@router.post('/demote')
async def demote(
    request: Request,
    session: SessionData = Depends(require_admin_session),
    admin_service: AdminService = Depends(get_admin_service),
):
    fields = read_form_fields(await request.form(), ('email',))
    try:
        await run_in_threadpool(admin_service.demote, session, fields['email'])
    except AppError as exc:
        return await run_in_threadpool(
            render_admin, request, admin_service, session, exc.message, exc.status_code
        )
    return RedirectResponse(url='/admin', status_code=303)
