from abc import ABC, abstractmethod

from src.app.repositories.credential_repository import ICredentialRepository
from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """
    Transaction boundary around the three auth stores.

    One instance per request. Nothing is persisted until commit(); leaving
    the context without committing discards the pending writes.
    """

    principals: ICredentialRepository
    sessions: ISessionRepository
    refresh_tokens: IRefreshTokenRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb) -> None:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
