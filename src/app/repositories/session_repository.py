from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session store interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def update_last_active(self, session_id: UUID, when: datetime) -> None:
        """Bump last_active_at for a session"""
        pass

    @abstractmethod
    async def delete(self, session_id: UUID) -> bool:
        """Delete a session. Returns True if it existed."""
        pass

    @abstractmethod
    async def delete_by_principal_id(self, user_id: UUID) -> int:
        """Delete all sessions of a user. Returns count of deleted sessions."""
        pass
