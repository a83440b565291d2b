"""
Use Cases

Organized into domain folders:
- auth/: Login, refresh, logout
- users/: Session revocation per user
- admin/: Maintenance (expired token purge)
"""

from .auth import (
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
)
from .users import (
    RevokeUserSessionsUseCase,
)
from .admin import (
    PurgeExpiredTokensUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # Users
    "RevokeUserSessionsUseCase",
    # Admin
    "PurgeExpiredTokensUseCase",
]
