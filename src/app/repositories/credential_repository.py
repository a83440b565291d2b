from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Role, User
from src.domain.lockout import LockoutDecision


class ICredentialRepository(ABC):
    """Credential store interface - application layer"""

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[User]:
        """Get user by exact (case-sensitive) name"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_password_hash(self, user_id: UUID) -> Optional[str]:
        """Get the stored password hash for a user, None if absent"""
        pass

    @abstractmethod
    async def get_roles(self, user_id: UUID) -> List[Role]:
        """Get roles assigned to a user, ordered by name"""
        pass

    @abstractmethod
    async def update_status(
        self,
        user_id: UUID,
        *,
        failed_login_count: Optional[int] = None,
        blocked: Optional[bool] = None,
        blocked_since: Optional[datetime] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update the given status fields, leaving the others untouched"""
        pass

    @abstractmethod
    async def register_failed_login(
        self, user_id: UUID, when: datetime, max_failed_logins: int
    ) -> LockoutDecision:
        """
        Atomically increment the failed login counter and block the user
        once it reaches max_failed_logins.

        Concurrent calls for the same user must each see a distinct count.
        """
        pass

    @abstractmethod
    async def update_last_login(self, user_id: UUID, when: datetime) -> None:
        """Record the time of a successful login"""
        pass
