import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.auth.admin import AdminService
from backend.auth.credentials import CredentialStore
from backend.auth.dependencies import LoginRequired
from backend.auth.service import AuthService
from backend.auth.session_store import InMemorySessionStore, SqlSessionStore
from backend.auth.sessions import SessionManager
from backend.core import config
from backend.core.errors import AppError
from backend.core.rendering import render
from backend.database import Base, SessionLocal, engine, ensure_user_schema
from backend.models import session, user
from backend.routes import admin_routes, auth_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
)
logger = logging.getLogger(__name__)


def build_session_manager() -> SessionManager:
    if config.SESSION_STORE_BACKEND == 'memory':
        return SessionManager(InMemorySessionStore())
    return SessionManager(SqlSessionStore(SessionLocal))


def create_app(
    credential_store: CredentialStore | None = None,
    session_manager: SessionManager | None = None,
) -> FastAPI:
    app = FastAPI(title='Members Portal', docs_url=None, redoc_url=None, openapi_url=None)

    credentials = credential_store or CredentialStore(SessionLocal)
    sessions = session_manager or build_session_manager()
    app.state.auth_service = AuthService(credentials, sessions)
    app.state.admin_service = AdminService(credentials)

    @app.on_event('startup')
    def initialize_database() -> None:
        config.validate_runtime_config()
        if credential_store is not None:
            return
        try:
            ensure_user_schema()
            user.Base.metadata.create_all(bind=engine)
            session.Base.metadata.create_all(bind=engine)
            removed = sessions.purge_expired()
            logger.info('Removed %d expired sessions', removed)
        except (SQLAlchemyError, AppError):
            logger.exception('Database initialization failed. Check DATABASE_URL and credentials.')

    @app.exception_handler(LoginRequired)
    async def redirect_to_login(request: Request, exc: LoginRequired):
        return RedirectResponse(url='/login', status_code=303)

    @app.exception_handler(AppError)
    async def render_app_error(request: Request, exc: AppError):
        return render(request, 'error.html', {'error': exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def render_not_found(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return render(request, '404.html', status_code=404)
        return await http_exception_handler(request, exc)

    app.include_router(auth_routes.router)
    app.include_router(admin_routes.router)
    return app


app = create_app()


if __name__ == '__main__':
    uvicorn.run('backend.main:app', host=config.HOST, port=config.PORT)
