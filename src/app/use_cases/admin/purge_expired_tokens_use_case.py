"""
Purge Expired Tokens Use Case

Housekeeping for refresh tokens past their expiry.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class PurgeExpiredTokensUseCase:
    """Deletes refresh tokens whose expires_at is in the past"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> int:
        async with self.uow:
            purged = await self.uow.refresh_tokens.delete_expired(utcnow())
            await self.uow.commit()

        if purged:
            logger.info("Purged %d expired refresh token(s)", purged)
        return purged
