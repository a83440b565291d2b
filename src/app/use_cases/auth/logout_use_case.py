"""
Logout Use Case

Ends the session a refresh token belongs to.
"""

import logging
from typing import Optional

from src.app.errors import ValidationError
from src.app.services.auth_settings import AuthSettings
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Idempotent: an unknown or already used token is a successful no-op
    - Refresh tokens of the session are deleted before the session itself
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, codec: Optional[TokenCodec] = None
    ):
        self.uow = uow
        self.settings = settings
        self.codec = codec or TokenCodec(settings)

    async def execute(self, refresh_token: str) -> None:
        if not refresh_token:
            raise ValidationError("refresh_token is required")

        token_hash = self.codec.hash_refresh_token(refresh_token)

        async with self.uow:
            record = await self.uow.refresh_tokens.get_by_token_hash(token_hash)
            if record is None:
                # Already logged out
                return

            await self.uow.refresh_tokens.delete_by_session_id(record.session_id)
            await self.uow.sessions.delete(record.session_id)
            await self.uow.commit()

            logger.info("Session %s ended by logout", record.session_id)
