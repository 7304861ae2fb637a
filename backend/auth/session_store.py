"""Session store backends.

A store only keeps ``(payload, expires_at)`` per session id; expiry policy
lives in ``SessionManager``. Two backends exist: the ``sessions`` table
(shared by every worker process) and an in-process dict.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Dict, Iterator, Optional, Protocol, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from backend.core.errors import InternalError
from backend.models.session import StoredSession

logger = logging.getLogger(__name__)

StoredEntry = Tuple[str, float]


class SessionStore(Protocol):
    def get(self, session_id: str) -> Optional[StoredEntry]: ...

    def set(self, session_id: str, payload: str, expires_at: float) -> None: ...

    def delete(self, session_id: str) -> None: ...

    def purge_expired(self, now: float) -> int: ...


class InMemorySessionStore:
    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[str, StoredEntry] = {}

    def get(self, session_id: str) -> Optional[StoredEntry]:
        with self._lock:
            return self._entries.get(session_id)

    def set(self, session_id: str, payload: str, expires_at: float) -> None:
        with self._lock:
            self._entries[session_id] = (payload, expires_at)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._entries.pop(session_id, None)

    def purge_expired(self, now: float) -> int:
        with self._lock:
            expired = [sid for sid, (_, expires_at) in self._entries.items() if expires_at <= now]
            for sid in expired:
                self._entries.pop(sid, None)
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SqlSessionStore:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Session store operation failed')
            raise InternalError() from exc
        finally:
            db.close()

    def get(self, session_id: str) -> Optional[StoredEntry]:
        with self._session() as db:
            row = db.get(StoredSession, session_id)
            if row is None:
                return None
            return row.payload, row.expires_at

    def set(self, session_id: str, payload: str, expires_at: float) -> None:
        with self._session() as db:
            db.merge(StoredSession(id=session_id, payload=payload, expires_at=expires_at))
            db.commit()

    def delete(self, session_id: str) -> None:
        with self._session() as db:
            db.query(StoredSession).filter(StoredSession.id == session_id).delete(synchronize_session=False)
            db.commit()

    def purge_expired(self, now: float) -> int:
        with self._session() as db:
            removed = (
                db.query(StoredSession)
                .filter(StoredSession.expires_at <= now)
                .delete(synchronize_session=False)
            )
            db.commit()
            return removed
