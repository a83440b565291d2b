"""
Login Use Case

Handles name/password authentication, lockout bookkeeping and session creation.
"""

import logging
from typing import Optional

from src.app.errors import (
    AccountLockedError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import burn_verification_time, verify_password
from src.app.services.token_codec import AccessTokenClaims, TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RefreshToken, Session
from src.domain.lockout import apply_login_attempt
from .dtos import LoginResponse, RoleInfo, UserSummary

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Name lookup is exact and case-sensitive
    - Status checked before the password: blocked, then inactive, then service account
    - Unknown user, missing hash, wrong password and inactive account share one message
    - Wrong password increments failed_login_count; 5 failures block the account
    - Lockout state is committed before the error is raised
    - Success resets failed_login_count and updates last_login_at
    - Creates a new session with a CSRF token and one refresh token
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, codec: Optional[TokenCodec] = None
    ):
        self.uow = uow
        self.settings = settings
        self.codec = codec or TokenCodec(settings)

    async def execute(
        self, name: str, password: str, user_agent: Optional[str] = None
    ) -> LoginResponse:
        """
        Execute login use case.

        Args:
            name: User name
            password: Plain text password
            user_agent: Client identification recorded on the refresh token

        Returns:
            LoginResponse with access, refresh and CSRF tokens plus user summary

        Raises:
            ValidationError: name or password empty
            UnauthorizedError: Invalid credentials or deactivated account
            AccountLockedError: Account blocked after too many failures
            ForbiddenError: Service account attempting interactive login
        """
        if not name or not password:
            raise ValidationError("name and password are required")

        async with self.uow:
            user = await self.uow.principals.get_by_name(name)
            if user is None:
                # Keep response time independent of user existence
                burn_verification_time(password)
                raise UnauthorizedError(INVALID_CREDENTIALS)

            if user.blocked:
                logger.info("Login rejected for blocked user %s", user.id)
                raise AccountLockedError(
                    "Account locked due to too many failed attempts"
                )
            if not user.active:
                logger.info("Login rejected for inactive user %s", user.id)
                raise UnauthorizedError(INVALID_CREDENTIALS)
            if user.is_service_account:
                logger.info("Login rejected for service account %s", user.id)
                raise ForbiddenError("Service accounts cannot log in interactively")

            password_hash = await self.uow.principals.get_password_hash(user.id)
            if not password_hash:
                burn_verification_time(password)
                raise UnauthorizedError(INVALID_CREDENTIALS)

            now = utcnow()

            if not verify_password(password, password_hash):
                # Incremented by the store, never from the count read above
                decision = await self.uow.principals.register_failed_login(
                    user.id, now, max_failed_logins=self.settings.max_failed_logins
                )
                await self.uow.commit()

                logger.warning(
                    "Failed login for user %s (%d consecutive)",
                    user.id,
                    decision.failed_login_count,
                )
                if decision.blocked:
                    logger.warning("User %s blocked after failed logins", user.id)
                raise UnauthorizedError(INVALID_CREDENTIALS)

            decision = apply_login_attempt(
                user.failed_login_count, succeeded=True, now=now
            )
            await self.uow.principals.update_status(
                user.id, failed_login_count=decision.failed_login_count
            )
            await self.uow.principals.update_last_login(user.id, now)

            roles = await self.uow.principals.get_roles(user.id)

            # Create session
            csrf_token = self.codec.generate_csrf_token()
            session = await self.uow.sessions.create(
                Session(user_id=user.id, csrf_token=csrf_token)
            )

            # Generate tokens
            claims = AccessTokenClaims(
                user_id=user.id,
                session_id=session.id,
                roles=[role.name for role in roles],
                module_roles=[],
            )
            access_token = self.codec.encode_access_token(claims)
            refresh_token = self.codec.generate_refresh_token()

            await self.uow.refresh_tokens.create(
                RefreshToken(
                    user_id=user.id,
                    session_id=session.id,
                    token_hash=self.codec.hash_refresh_token(refresh_token),
                    expires_at=now + self.settings.refresh_expiry,
                    user_agent=user_agent,
                )
            )

            await self.uow.commit()

            logger.info("User %s logged in, session %s", user.id, session.id)

            return LoginResponse(
                access_token=access_token,
                refresh_token=refresh_token,
                csrf_token=csrf_token,
                user=UserSummary(
                    id=str(user.id),
                    name=user.name,
                    full_name=user.full_name,
                    roles=[RoleInfo(id=str(role.id), name=role.name) for role in roles],
                ),
            )
