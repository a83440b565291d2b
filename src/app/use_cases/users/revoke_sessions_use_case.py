"""
Revoke Sessions Use Case

Ends every session of a user ("log out everywhere").
"""

import logging
from uuid import UUID

from src.app.errors import NotFoundError
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RevokeUserSessionsUseCase:
    """
    Use case for revoking all sessions of a user.

    Business Rules:
    - Refresh tokens are deleted before sessions, so a refresh racing the
      revocation cannot leave a token pointing at a deleted session
    - Does not change blocked/active status
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> int:
        """
        Revoke all sessions for a user.

        Args:
            user_id: User whose sessions will be revoked

        Returns:
            Number of sessions deleted

        Raises:
            NotFoundError: User does not exist
        """
        async with self.uow:
            user = await self.uow.principals.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User not found")

            tokens = await self.uow.refresh_tokens.delete_by_principal_id(user_id)
            sessions = await self.uow.sessions.delete_by_principal_id(user_id)
            await self.uow.commit()

            logger.info(
                "Revoked %d session(s) and %d refresh token(s) for user %s",
                sessions,
                tokens,
                user_id,
            )
            return sessions
