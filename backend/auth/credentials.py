"""Credential store backed by the ``users`` table."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from backend.core.errors import DuplicateEmailError, InternalError
from backend.models.user import Role, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserRecord:
    email: str
    name: str
    password_hash: str
    role: str = Role.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        email=user.email,
        name=user.name,
        password_hash=user.hashed_password,
        role=user.role or Role.USER.value,
    )


class CredentialStore:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Credential store operation failed')
            raise InternalError() from exc
        finally:
            db.close()

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._session() as db:
            user = db.query(User).filter(User.email == email).first()
            return _to_record(user) if user is not None else None

    def insert(self, record: UserRecord) -> None:
        with self._session() as db:
            db.add(
                User(
                    email=record.email,
                    name=record.name,
                    hashed_password=record.password_hash,
                    role=record.role,
                )
            )
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise DuplicateEmailError() from exc

    def set_role(self, email: str, role: Role) -> int:
        with self._session() as db:
            updated = (
                db.query(User)
                .filter(User.email == email)
                .update({User.role: Role(role).value}, synchronize_session=False)
            )
            db.commit()
            return updated

    def list_all(self) -> list[UserRecord]:
        with self._session() as db:
            return [_to_record(user) for user in db.query(User).order_by(User.id).all()]
