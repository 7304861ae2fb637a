from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config

def create_session_cookie(session_id: str, expires_seconds: int | None = None) -> str:
    expire_seconds = expires_seconds or config.SESSION_TTL_SECONDS
    now = datetime.now(timezone.utc)
    payload = {"sid": session_id, "exp": now + timedelta(seconds=expire_seconds), "iat": now}
    return jwt.encode(payload, config.SESSION_SECRET, algorithm=config.SESSION_SIGNING_ALGORITHM)


def decode_session_cookie(token: str) -> str | None:
    try:
        payload = jwt.decode(token, config.SESSION_SECRET, algorithms=[config.SESSION_SIGNING_ALGORITHM])
    except jwt.PyJWTError:
        return None

    session_id = payload.get("sid")
    if not isinstance(session_id, str) or not session_id:
        return None
    return session_id


def seal_payload(data: dict) -> str:
    return jwt.encode(data, config.SESSION_STORE_SECRET, algorithm=config.SESSION_SIGNING_ALGORITHM)


def open_payload(sealed: str) -> dict | None:
    try:
        return jwt.decode(sealed, config.SESSION_STORE_SECRET, algorithms=[config.SESSION_SIGNING_ALGORITHM])
    except jwt.PyJWTError:
        return None
