import logging
import random
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from backend.auth import jwt_handler
from backend.auth.dependencies import (
    get_auth_service,
    get_current_session,
    get_session_id,
    require_session,
)
from backend.auth.service import AuthService
from backend.auth.sessions import SessionData
from backend.core import config
from backend.core.errors import AppError, InternalError
from backend.core.rendering import read_form_fields, render

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

MEMBER_IMAGES = ['cat1.jpg', 'cat2.jpg', 'cat3.jpg', 'cat4.jpg', 'cat5.jpg']


def start_session_response(session_id: str, ttl_seconds: int) -> RedirectResponse:
    response = RedirectResponse(url='/members', status_code=303)
    response.set_cookie(
        config.SESSION_COOKIE_NAME,
        jwt_handler.create_session_cookie(session_id, ttl_seconds),
        max_age=ttl_seconds,
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite='lax',
        path='/',
    )
    return response


@router.get('/')
def home(request: Request, session: Optional[SessionData] = Depends(get_current_session)):
    return render(request, 'home.html', {'session': session})


@router.get('/signup')
def signup_form(request: Request):
    return render(request, 'signup.html', {'error': None})


@router.post('/signup')
async def signup_submit(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    form = await request.form()
    fields = read_form_fields(form, ('name', 'email', 'password'))

    try:
        session_id = await run_in_threadpool(auth_service.signup, **fields)
    except AppError as exc:
        return render(request, 'signup.html', {'error': exc.message}, status_code=exc.status_code)

    return start_session_response(session_id, auth_service.sessions.ttl_seconds)


@router.get('/login')
def login_form(request: Request):
    return render(request, 'login.html', {'error': None})


@router.post('/login')
async def login_submit(request: Request, auth_service: AuthService = Depends(get_auth_service)):
    form = await request.form()
    fields = read_form_fields(form, ('email', 'password'))

    try:
        session_id = await run_in_threadpool(auth_service.login, **fields)
    except AppError as exc:
        return render(request, 'login.html', {'error': exc.message}, status_code=exc.status_code)

    return start_session_response(session_id, auth_service.sessions.ttl_seconds)


@router.get('/members')
def members(request: Request, session: SessionData = Depends(require_session)):
    return render(
        request,
        'members.html',
        {'session': session, 'image': random.choice(MEMBER_IMAGES)},
    )


@router.get('/logout')
def logout(
    session_id: Optional[str] = Depends(get_session_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        auth_service.logout(session_id)
    except InternalError:
        logger.warning('Session could not be destroyed; clearing the cookie anyway')

    response = RedirectResponse(url='/login', status_code=303)
    response.delete_cookie(config.SESSION_COOKIE_NAME, path='/')
    return response
