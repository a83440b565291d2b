"""
Refresh Token Use Case

Exchanges a refresh token for a new token pair, rotating the refresh token.
"""

import logging
from typing import Optional

from src.app.errors import AccountLockedError, UnauthorizedError, ValidationError
from src.app.services.auth_settings import AuthSettings
from src.app.services.token_codec import AccessTokenClaims, TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RefreshToken
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)

INVALID_REFRESH_TOKEN = "Invalid refresh token"


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh tokens are looked up by SHA-256 hash
    - Expired tokens are deleted and rejected
    - Rotation: the presented token is deleted before a new one is minted,
      and only the caller whose delete removed the row may continue
    - User status re-checked (blocked / inactive / deleted)
    - Roles re-fetched, never copied from the previous access token
    - The session id is kept; the session's last_active_at is bumped
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, codec: Optional[TokenCodec] = None
    ):
        self.uow = uow
        self.settings = settings
        self.codec = codec or TokenCodec(settings)

    async def execute(
        self, refresh_token: str, user_agent: Optional[str] = None
    ) -> RefreshTokenResponse:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate
            user_agent: Client identification recorded on the new refresh token

        Returns:
            RefreshTokenResponse containing the new token pair

        Raises:
            ValidationError: refresh_token empty
            UnauthorizedError: Unknown, replayed or expired token, user gone or inactive
            AccountLockedError: User blocked since the token was issued
        """
        if not refresh_token:
            raise ValidationError("refresh_token is required")

        token_hash = self.codec.hash_refresh_token(refresh_token)

        async with self.uow:
            record = await self.uow.refresh_tokens.get_by_token_hash(token_hash)
            if record is None:
                logger.warning("Unknown refresh token %s...", token_hash[:8])
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)

            now = utcnow()

            if record.expires_at < now:
                await self.uow.refresh_tokens.delete_by_token_hash(token_hash)
                await self.uow.commit()
                logger.warning("Expired refresh token for session %s", record.session_id)
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)

            # Rotate first: a concurrent call with the same token sees nothing to delete
            deleted = await self.uow.refresh_tokens.delete_by_token_hash(token_hash)
            if not deleted:
                logger.warning(
                    "Refresh token for session %s already consumed", record.session_id
                )
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)

            user = await self.uow.principals.get_by_id(record.user_id)
            if user is None:
                await self.uow.commit()
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)
            if user.blocked:
                await self.uow.commit()
                logger.info("Refresh rejected for blocked user %s", user.id)
                raise AccountLockedError(
                    "Account locked due to too many failed attempts"
                )
            if not user.active:
                await self.uow.commit()
                logger.info("Refresh rejected for inactive user %s", user.id)
                raise UnauthorizedError(INVALID_REFRESH_TOKEN)

            await self.uow.sessions.update_last_active(record.session_id, now)

            roles = await self.uow.principals.get_roles(user.id)

            claims = AccessTokenClaims(
                user_id=user.id,
                session_id=record.session_id,
                roles=[role.name for role in roles],
                module_roles=[],
            )
            access_token = self.codec.encode_access_token(claims)
            new_refresh_token = self.codec.generate_refresh_token()

            await self.uow.refresh_tokens.create(
                RefreshToken(
                    user_id=user.id,
                    session_id=record.session_id,
                    token_hash=self.codec.hash_refresh_token(new_refresh_token),
                    expires_at=now + self.settings.refresh_expiry,
                    user_agent=user_agent,
                )
            )

            await self.uow.commit()

            logger.info("Session %s refreshed", record.session_id)

            return RefreshTokenResponse(
                access_token=access_token, refresh_token=new_refresh_token
            )
