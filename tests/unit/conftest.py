from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import hash_password
from src.domain.entities import Role, User
from src.domain.lockout import LockoutDecision
from tests.fixtures.fakes import FakeUnitOfWork, InMemoryDatabase
from tests.fixtures.principals import PASSWORD


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret="unit-test-secret",
        access_expiry=timedelta(minutes=15),
        refresh_expiry=timedelta(days=7),
    )


@pytest.fixture(scope="session")
def password_hash():
    # Low cost factor keeps the suite fast; verification is identical
    return hash_password(PASSWORD, rounds=4)


@pytest.fixture
def make_user(password_hash):
    def _make_user(**overrides):
        fields = dict(
            name="alice",
            full_name="Alice Example",
            password_hash=password_hash,
            active=True,
            blocked=False,
            failed_login_count=0,
            is_service_account=False,
        )
        fields.update(overrides)
        return User(**fields)

    return _make_user


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.principals = MagicMock()
    uow.principals.get_by_name = AsyncMock()
    uow.principals.get_by_id = AsyncMock()
    uow.principals.get_password_hash = AsyncMock()
    uow.principals.get_roles = AsyncMock(return_value=[])
    uow.principals.update_status = AsyncMock()
    uow.principals.register_failed_login = AsyncMock(
        return_value=LockoutDecision(failed_login_count=1, blocked=False)
    )
    uow.principals.update_last_login = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.update_last_active = AsyncMock()
    uow.sessions.delete = AsyncMock(return_value=True)
    uow.sessions.delete_by_principal_id = AsyncMock(return_value=0)

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.refresh_tokens.get_by_token_hash = AsyncMock()
    uow.refresh_tokens.delete_by_token_hash = AsyncMock(return_value=True)
    uow.refresh_tokens.delete_by_session_id = AsyncMock(return_value=1)
    uow.refresh_tokens.delete_by_principal_id = AsyncMock(return_value=0)
    uow.refresh_tokens.delete_expired = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def memory_db():
    return InMemoryDatabase()


@pytest.fixture
def fake_uow(memory_db):
    return FakeUnitOfWork(memory_db)


@pytest.fixture
def alice(memory_db, make_user):
    """Active, unblocked, interactive user with two roles"""
    roles = [Role(name="viewer"), Role(name="editor")]
    return memory_db.add_user(make_user(), roles=roles)
