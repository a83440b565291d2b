from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.database import enable_sqlite_foreign_keys
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import to_client_error
from src.app.errors import InvalidTokenError, UnauthorizedError
from src.app.services.auth_service import AuthService
from src.app.services.auth_settings import AuthSettings
from src.app.services.token_codec import AccessTokenClaims, TokenCodec

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Loaded once at import; changing keys or expiries requires a restart
auth_settings = AuthSettings.from_config(ApplicationConfig)
token_codec = TokenCodec(auth_settings)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_settings() -> AuthSettings:
    return auth_settings


def get_token_codec(settings: AuthSettings = Depends(get_auth_settings)) -> TokenCodec:
    if settings is auth_settings:
        return token_codec
    return TokenCodec(settings)


async def get_auth_service(
    uow=Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(uow, settings, codec)


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    codec: TokenCodec = Depends(get_token_codec),
) -> AccessTokenClaims:
    """
    Dependency to extract and verify the access token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded claims containing user_id, session_id, roles, module_roles

    Raises:
        ClientError: 401 UNAUTHORIZED if the token is missing,
            401 INVALID_TOKEN if it is invalid or expired
    """
    if credentials is None:
        raise to_client_error(UnauthorizedError("Authentication required"))

    try:
        return codec.decode_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise to_client_error(exc)
