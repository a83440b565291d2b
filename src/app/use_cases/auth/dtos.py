"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import List, Optional
from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class RoleInfo(BaseModel):
    """Role reference in authentication responses"""

    id: str
    name: str


class UserSummary(BaseModel):
    """Safe user summary returned on login (never includes the password hash)"""

    id: str
    name: str
    full_name: Optional[str] = None
    roles: List[RoleInfo]


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    refresh_token: str
    csrf_token: str
    user: UserSummary


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
