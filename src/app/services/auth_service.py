"""
Auth Service

Session/token lifecycle orchestrator: one entry point for login, refresh,
logout and the administrative session operations. Stateless between calls;
all state lives behind the unit of work.
"""

from typing import Optional
from uuid import UUID

from src.app.services.auth_settings import AuthSettings
from src.app.services.token_codec import AccessTokenClaims, TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import PurgeExpiredTokensUseCase
from src.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
)
from src.app.use_cases.users import RevokeUserSessionsUseCase


class AuthService:
    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        codec: Optional[TokenCodec] = None,
    ):
        self.uow = uow
        self.settings = settings
        self.codec = codec or TokenCodec(settings)

    async def login(
        self, name: str, password: str, user_agent: Optional[str] = None
    ) -> LoginResponse:
        use_case = LoginUseCase(self.uow, self.settings, self.codec)
        return await use_case.execute(name, password, user_agent)

    async def refresh(
        self, refresh_token: str, user_agent: Optional[str] = None
    ) -> RefreshTokenResponse:
        use_case = RefreshTokenUseCase(self.uow, self.settings, self.codec)
        return await use_case.execute(refresh_token, user_agent)

    async def logout(self, refresh_token: str) -> None:
        use_case = LogoutUseCase(self.uow, self.settings, self.codec)
        await use_case.execute(refresh_token)

    def decode_access_token(self, token: str) -> AccessTokenClaims:
        return self.codec.decode_access_token(token)

    async def revoke_user_sessions(self, user_id: UUID) -> int:
        return await RevokeUserSessionsUseCase(self.uow).execute(user_id)

    async def purge_expired_tokens(self) -> int:
        return await PurgeExpiredTokensUseCase(self.uow).execute()
