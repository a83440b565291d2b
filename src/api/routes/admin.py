"""
Admin API Routes - Session Maintenance Endpoints

These endpoints are for internal service integrations.
Authentication is via Admin API Key, not user access tokens.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import to_client_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.errors import AuthError
from src.app.services.auth_service import AuthService
from src.depends import get_auth_service

router = APIRouter(prefix="/admin", tags=["Admin"])


class RevokeUserSessionsResponse(BaseModel):
    user_id: str
    revoked_sessions: int


class PurgeExpiredTokensResponse(BaseModel):
    purged: int


@router.post(
    "/users/{user_id}/sessions/revoke",
    status_code=status.HTTP_200_OK,
    response_model=RevokeUserSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def revoke_user_sessions(
    user_id: UUID,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Revoke All Sessions Of A User

    Deletes every refresh token and session of the user. Existing access
    tokens stay valid until they expire.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: User not found
    """
    try:
        count = await auth_service.revoke_user_sessions(user_id)
    except AuthError as exc:
        raise to_client_error(exc)
    return RevokeUserSessionsResponse(user_id=str(user_id), revoked_sessions=count)


@router.post(
    "/refresh-tokens/purge-expired",
    status_code=status.HTTP_200_OK,
    response_model=PurgeExpiredTokensResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_expired_tokens(auth_service: AuthService = Depends(get_auth_service)):
    """
    Purge Expired Refresh Tokens

    Requires: X-Admin-API-Key header
    """
    purged = await auth_service.purge_expired_tokens()
    return PurgeExpiredTokensResponse(purged=purged)
