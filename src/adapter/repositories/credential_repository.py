from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.credential_repository import ICredentialRepository
from src.domain.entities import Role, User, UserRole
from src.domain.lockout import LockoutDecision, apply_login_attempt


class CredentialRepository(ICredentialRepository):
    """Credential store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_name(self, name: str) -> Optional[User]:
        """Get user by exact name"""
        # Status flags change under concurrent logins; never serve them from the identity map
        stmt = select(User).where(User.name == name).execution_options(
            populate_existing=True
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id).execution_options(
            populate_existing=True
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_password_hash(self, user_id: UUID) -> Optional[str]:
        """Select only the password column, never the full row"""
        stmt = select(User.password_hash).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_roles(self, user_id: UUID) -> List[Role]:
        """Get roles assigned to a user, ordered by name"""
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update_status(
        self,
        user_id: UUID,
        *,
        failed_login_count: Optional[int] = None,
        blocked: Optional[bool] = None,
        blocked_since: Optional[datetime] = None,
        active: Optional[bool] = None,
    ) -> None:
        """Update only the status fields that were passed"""
        values = {}
        if failed_login_count is not None:
            values["failed_login_count"] = failed_login_count
        if blocked is not None:
            values["blocked"] = blocked
        if blocked_since is not None:
            values["blocked_since"] = blocked_since
        if active is not None:
            values["active"] = active
        if not values:
            return

        stmt = update(User).where(User.id == user_id).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()

    async def register_failed_login(
        self, user_id: UUID, when: datetime, max_failed_logins: int
    ) -> LockoutDecision:
        """
        Increment in SQL and read the new value back in one statement.

        The UPDATE takes the row write lock, so concurrent failures for the
        same user serialize and every increment is counted.
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(failed_login_count=User.failed_login_count + 1)
            .returning(User.failed_login_count)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        count = result.scalar_one()

        decision = apply_login_attempt(
            count - 1,
            succeeded=False,
            now=when,
            max_failed_logins=max_failed_logins,
        )
        if decision.blocked:
            # Keep blocked_since at the first crossing
            stmt = (
                update(User)
                .where(User.id == user_id, User.blocked.is_(False))
                .values(blocked=True, blocked_since=when)
                .execution_options(synchronize_session=False)
            )
            await self.session.execute(stmt)

        await self.session.flush()
        return decision

    async def update_last_login(self, user_id: UUID, when: datetime) -> None:
        stmt = update(User).where(User.id == user_id).values(last_login_at=when)
        await self.session.execute(stmt)
        await self.session.flush()
