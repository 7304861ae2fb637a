from typing import Optional

from backend.auth.sessions import SessionData


def require_admin(session: Optional[SessionData]) -> bool:
    """Allow only an existing session whose cached role is admin."""
    return session is not None and session.is_admin
