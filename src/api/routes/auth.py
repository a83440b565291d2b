from typing import Optional

from fastapi import APIRouter, Depends, Header, Response, status
from pydantic import BaseModel, Field

from src.api.error import to_client_error
from src.app.errors import AuthError
from src.app.services.auth_service import AuthService
from src.app.services.token_codec import AccessTokenClaims
from src.app.use_cases.auth import LoginResponse, RefreshTokenResponse
from src.depends import get_auth_service, get_current_claims

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Missing fields default to empty strings so the use case reports them
    as VALIDATION_ERROR (400) instead of FastAPI's 422.
    """

    name: str = Field("", description="User name")
    password: str = Field("", description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    user_agent: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    User Login

    Authenticates name/password, creates a session and returns the access
    token, refresh token and CSRF token.

    Raises:
        - 400 Bad Request: name or password missing
        - 401 Unauthorized: Invalid credentials or deactivated account
        - 423 Locked: Account blocked after too many failed attempts
        - 403 Forbidden: Service account
    """
    try:
        return await auth_service.login(request.name, request.password, user_agent)
    except AuthError as exc:
        raise to_client_error(exc)


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload"""

    refresh_token: str = Field("", description="Refresh token")


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh(
    request: RefreshRequest,
    user_agent: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Refresh Access Token

    Exchanges a refresh token for a new access/refresh pair. The presented
    refresh token is invalidated (rotation).

    Raises:
        - 400 Bad Request: refresh_token missing
        - 401 Unauthorized: Unknown, expired or already used token
        - 423 Locked: Account blocked since the token was issued
    """
    try:
        return await auth_service.refresh(request.refresh_token, user_agent)
    except AuthError as exc:
        raise to_client_error(exc)


class LogoutRequest(BaseModel):
    """Logout HTTP request payload"""

    refresh_token: str = Field("", description="Refresh token of the session to end")


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: LogoutRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Logout

    Deletes the session and all of its refresh tokens. Succeeds even when
    the token is unknown or already logged out.

    Raises:
        - 400 Bad Request: refresh_token missing
    """
    try:
        await auth_service.logout(request.refresh_token)
    except AuthError as exc:
        raise to_client_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccessTokenClaims)
async def me(claims: AccessTokenClaims = Depends(get_current_claims)):
    """Return the claims of the presented access token"""
    return claims
