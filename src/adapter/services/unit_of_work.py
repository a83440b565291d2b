from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.credential_repository import CredentialRepository
from src.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """UnitOfWork over a single AsyncSession shared by all three stores"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.principals = CredentialRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        # No-op after a commit; drops uncommitted writes otherwise
        await self.rollback()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
