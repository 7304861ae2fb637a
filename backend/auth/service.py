"""Signup, login and logout."""

import logging
from typing import Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from backend.auth.credentials import CredentialStore, UserRecord
from backend.auth.passwords import dummy_hash, hash_password, verify_password
from backend.auth.schemas import LoginRequest, SignupRequest
from backend.auth.sessions import SessionData, SessionManager
from backend.core.errors import DuplicateEmailError, InvalidCredentialsError, ValidationError
from backend.models.user import Role

logger = logging.getLogger(__name__)

RequestModel = TypeVar('RequestModel', bound=BaseModel)


def parse_request(model: Type[RequestModel], **fields) -> RequestModel:
    try:
        return model(**fields)
    except SchemaValidationError as exc:
        raise ValidationError() from exc


class AuthService:
    def __init__(self, credentials: CredentialStore, sessions: SessionManager) -> None:
        self.credentials = credentials
        self.sessions = sessions

    def signup(self, name, email, password) -> str:
        """Register an account and return the id of its first session."""
        if not name or not email or not password:
            raise ValidationError('All fields are required.')

        request = parse_request(SignupRequest, name=name, email=email, password=password)

        if self.credentials.find_by_email(request.email) is not None:
            raise DuplicateEmailError()

        self.credentials.insert(
            UserRecord(
                email=request.email,
                name=request.name,
                password_hash=hash_password(request.password),
                role=Role.USER.value,
            )
        )
        logger.info('Registered account %s', request.email)

        return self.sessions.create(
            SessionData(username=request.email, name=request.name, role=Role.USER.value)
        )

    def login(self, email, password) -> str:
        request = parse_request(LoginRequest, email=email, password=password)

        record = self.credentials.find_by_email(request.email)
        if record is None:
            verify_password(request.password, dummy_hash())
            raise InvalidCredentialsError()

        if not verify_password(request.password, record.password_hash):
            raise InvalidCredentialsError()

        logger.info('Account %s logged in', record.email)
        return self.sessions.create(SessionData(username=record.email, name=record.name, role=record.role))

    def logout(self, session_id: str | None) -> None:
        self.sessions.destroy(session_id)
