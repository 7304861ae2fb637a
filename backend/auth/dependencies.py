from typing import Optional

from fastapi import Depends, Request

from backend.auth import jwt_handler
from backend.auth.admin import AdminService
from backend.auth.guard import require_admin
from backend.auth.service import AuthService
from backend.auth.sessions import SessionData, SessionManager
from backend.core import config


class LoginRequired(Exception):
    """Raised by guards; the app answers with a redirect to the login page."""


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_admin_service(request: Request) -> AdminService:
    return request.app.state.admin_service


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.auth_service.sessions


def get_session_id(request: Request) -> Optional[str]:
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if not token:
        return None
    return jwt_handler.decode_session_cookie(token)


def get_current_session(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionManager = Depends(get_session_manager),
) -> Optional[SessionData]:
    return sessions.read(session_id)


def require_session(session: Optional[SessionData] = Depends(get_current_session)) -> SessionData:
    if session is None:
        raise LoginRequired()
    return session


def require_admin_session(session: Optional[SessionData] = Depends(get_current_session)) -> SessionData:
    if not require_admin(session):
        raise LoginRequired()
    return session
