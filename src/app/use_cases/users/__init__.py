"""
User Session Management Use Cases
"""

from .revoke_sessions_use_case import RevokeUserSessionsUseCase

__all__ = [
    "RevokeUserSessionsUseCase",
]
