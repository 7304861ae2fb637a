from __future__ import annotations

import logging
import secrets
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from backend.auth import jwt_handler
from backend.auth.session_store import SessionStore
from backend.core import config
from backend.models.user import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionData:
    """What a session remembers about its user.

    ``role`` is copied at signup/login time and is not refreshed when an
    admin later changes the stored role.
    """

    username: str
    name: str
    role: str = Role.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["SessionData"]:
        try:
            return cls(username=data["username"], name=data["name"], role=data["role"])
        except (KeyError, TypeError):
            return None


class SessionManager:
    """Issues, reads and destroys sessions with an absolute lifetime."""

    def __init__(
        self,
        store: SessionStore,
        ttl_seconds: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._ttl = max(1, int(ttl_seconds or config.SESSION_TTL_SECONDS))
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def create(self, data: SessionData) -> str:
        session_id = secrets.token_urlsafe(32)
        expires_at = self._clock() + self._ttl
        self._store.set(session_id, jwt_handler.seal_payload(data.to_dict()), expires_at)
        return session_id

    def read(self, session_id: str | None) -> Optional[SessionData]:
        if not session_id:
            return None

        entry = self._store.get(session_id)
        if entry is None:
            return None

        payload, expires_at = entry
        if expires_at <= self._clock():
            self._store.delete(session_id)
            return None

        data = jwt_handler.open_payload(payload)
        session = SessionData.from_dict(data) if data is not None else None
        if session is None:
            logger.warning('Discarding session with an unreadable payload')
            self._store.delete(session_id)
        return session

    def destroy(self, session_id: str | None) -> None:
        if not session_id:
            return
        self._store.delete(session_id)

    def purge_expired(self) -> int:
        return self._store.purge_expired(self._clock())
