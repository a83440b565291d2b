"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .user import User
from .role import Role, UserRole
from .session import Session
from .refresh_token import RefreshToken

__all__ = [
    "User",
    "Role",
    "UserRole",
    "Session",
    "RefreshToken",
]
