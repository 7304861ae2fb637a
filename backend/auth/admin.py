"""Role management for administrators.

Callers check ``guard.require_admin`` before using this service. Promoting or
demoting an email with no account is a no-op, matching the store.
"""

import logging

from backend.auth.credentials import CredentialStore, UserRecord
from backend.auth.schemas import RoleChangeRequest
from backend.auth.service import parse_request
from backend.auth.sessions import SessionData
from backend.core.errors import SelfDemotionError
from backend.models.user import Role

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, credentials: CredentialStore) -> None:
        self.credentials = credentials

    def list_users(self) -> list[UserRecord]:
        return self.credentials.list_all()

    def promote(self, actor: SessionData, email) -> None:
        request = parse_request(RoleChangeRequest, email=email)
        updated = self.credentials.set_role(request.email, Role.ADMIN)
        logger.info('%s promoted %s to admin (%d updated)', actor.username, request.email, updated)

    def demote(self, actor: SessionData, email) -> None:
        request = parse_request(RoleChangeRequest, email=email)
        if request.email == actor.username:
            logger.warning('%s attempted to demote themselves', actor.username)
            raise SelfDemotionError()

        updated = self.credentials.set_role(request.email, Role.USER)
        logger.info('%s demoted %s to user (%d updated)', actor.username, request.email, updated)
