from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """Refresh-token store interface - application layer"""

    @abstractmethod
    async def create(self, token: RefreshToken) -> RefreshToken:
        """Create a new refresh token record"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Get refresh token record by secret hash"""
        pass

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> bool:
        """
        Delete the record with this hash.

        Must be atomic against concurrent calls with the same hash: exactly
        one caller observes True, every other caller observes False.
        """
        pass

    @abstractmethod
    async def delete_by_session_id(self, session_id: UUID) -> int:
        """Delete all records of a session. Returns count."""
        pass

    @abstractmethod
    async def delete_by_principal_id(self, user_id: UUID) -> int:
        """Delete all records of a user. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete records with expires_at before now. Returns count."""
        pass
