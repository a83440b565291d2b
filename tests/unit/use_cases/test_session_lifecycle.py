"""
Session lifecycle against the in-memory store

Runs login, refresh and logout together so the store state between calls
is real rather than mocked.
"""

import asyncio
from datetime import timedelta

import pytest

from src.app.errors import AccountLockedError, UnauthorizedError
from src.app.services.auth_service import AuthService
from src.domain.base import utcnow
from tests.fixtures.principals import PASSWORD


@pytest.fixture
def auth_service(fake_uow, settings):
    return AuthService(fake_uow, settings)


@pytest.mark.asyncio
async def test_full_session_lifecycle(auth_service, memory_db, alice):
    login = await auth_service.login("alice", PASSWORD, "browser")
    claims = auth_service.decode_access_token(login.access_token)

    assert claims.user_id == alice.id
    assert claims.roles == ["editor", "viewer"]
    assert claims.session_id in memory_db.sessions
    assert alice.last_login_at is not None

    [record] = memory_db.tokens_for_session(claims.session_id)
    drift = record.expires_at - alice.last_login_at - auth_service.settings.refresh_expiry
    assert abs(drift) < timedelta(seconds=5)

    refreshed = await auth_service.refresh(login.refresh_token)
    refreshed_claims = auth_service.decode_access_token(refreshed.access_token)
    assert refreshed_claims.session_id == claims.session_id
    assert len(memory_db.tokens_for_session(claims.session_id)) == 1

    await auth_service.logout(refreshed.refresh_token)

    assert claims.session_id not in memory_db.sessions
    assert memory_db.tokens_for_session(claims.session_id) == []
    for secret in (login.refresh_token, refreshed.refresh_token):
        with pytest.raises(UnauthorizedError):
            await auth_service.refresh(secret)


@pytest.mark.asyncio
async def test_old_refresh_token_rejected_after_rotation(auth_service, alice):
    login = await auth_service.login("alice", PASSWORD)
    await auth_service.refresh(login.refresh_token)

    with pytest.raises(UnauthorizedError):
        await auth_service.refresh(login.refresh_token)


@pytest.mark.asyncio
async def test_concurrent_refresh_only_one_wins(auth_service, memory_db, alice):
    login = await auth_service.login("alice", PASSWORD)

    results = await asyncio.gather(
        auth_service.refresh(login.refresh_token),
        auth_service.refresh(login.refresh_token),
        return_exceptions=True,
    )

    winners = [r for r in results if not isinstance(r, Exception)]
    losers = [r for r in results if isinstance(r, UnauthorizedError)]
    assert len(winners) == 1
    assert len(losers) == 1

    session_id = auth_service.decode_access_token(login.access_token).session_id
    tokens = memory_db.tokens_for_session(session_id)
    assert len(tokens) == 1
    assert tokens[0].token_hash == auth_service.codec.hash_refresh_token(
        winners[0].refresh_token
    )


@pytest.mark.asyncio
async def test_fifth_failure_locks_account(auth_service, alice):
    for attempt in range(1, 5):
        with pytest.raises(UnauthorizedError):
            await auth_service.login("alice", "WrongPassword!")
        assert alice.failed_login_count == attempt
        assert alice.blocked is False

    with pytest.raises(UnauthorizedError):
        await auth_service.login("alice", "WrongPassword!")

    assert alice.failed_login_count == 5
    assert alice.blocked is True
    assert alice.blocked_since is not None

    # Correct password no longer helps
    with pytest.raises(AccountLockedError):
        await auth_service.login("alice", PASSWORD)


@pytest.mark.asyncio
async def test_concurrent_failures_all_count(auth_service, alice):
    results = await asyncio.gather(
        *(auth_service.login("alice", "WrongPassword!") for _ in range(5)),
        return_exceptions=True,
    )

    assert all(isinstance(r, UnauthorizedError) for r in results)
    assert alice.failed_login_count == 5
    assert alice.blocked is True


@pytest.mark.asyncio
async def test_successful_login_resets_failure_count(auth_service, alice):
    for _ in range(4):
        with pytest.raises(UnauthorizedError):
            await auth_service.login("alice", "WrongPassword!")

    assert alice.failed_login_count == 4

    await auth_service.login("alice", PASSWORD)

    assert alice.failed_login_count == 0
    assert alice.blocked is False
    assert alice.last_login_at is not None


@pytest.mark.asyncio
async def test_name_match_is_case_sensitive(auth_service, alice):
    with pytest.raises(UnauthorizedError):
        await auth_service.login("Alice", PASSWORD)

    assert alice.failed_login_count == 0


@pytest.mark.asyncio
async def test_expired_refresh_token_rejected(auth_service, memory_db, alice):
    login = await auth_service.login("alice", PASSWORD)
    token_hash = auth_service.codec.hash_refresh_token(login.refresh_token)
    memory_db.refresh_tokens[token_hash].expires_at = utcnow() - timedelta(seconds=1)

    with pytest.raises(UnauthorizedError):
        await auth_service.refresh(login.refresh_token)

    assert token_hash not in memory_db.refresh_tokens


@pytest.mark.asyncio
async def test_refresh_after_block_fails(auth_service, alice):
    login = await auth_service.login("alice", PASSWORD)
    alice.blocked = True

    with pytest.raises(AccountLockedError):
        await auth_service.refresh(login.refresh_token)


@pytest.mark.asyncio
async def test_refresh_picks_up_role_changes(auth_service, memory_db, alice):
    login = await auth_service.login("alice", PASSWORD)
    memory_db.user_roles = {
        (user_id, role_id)
        for (user_id, role_id) in memory_db.user_roles
        if memory_db.roles[role_id].name != "editor"
    }

    refreshed = await auth_service.refresh(login.refresh_token)

    assert auth_service.decode_access_token(refreshed.access_token).roles == ["viewer"]


@pytest.mark.asyncio
async def test_logout_twice_is_noop(auth_service, memory_db, alice):
    login = await auth_service.login("alice", PASSWORD)
    await auth_service.logout(login.refresh_token)
    mutations = memory_db.mutations

    await auth_service.logout(login.refresh_token)

    assert memory_db.mutations == mutations


@pytest.mark.asyncio
async def test_logout_leaves_other_sessions(auth_service, memory_db, alice):
    first = await auth_service.login("alice", PASSWORD)
    second = await auth_service.login("alice", PASSWORD)

    await auth_service.logout(first.refresh_token)

    second_session = auth_service.decode_access_token(second.access_token).session_id
    assert second_session in memory_db.sessions
    await auth_service.refresh(second.refresh_token)


@pytest.mark.asyncio
async def test_revoke_and_purge(auth_service, memory_db, alice):
    first = await auth_service.login("alice", PASSWORD)
    await auth_service.login("alice", PASSWORD)

    assert await auth_service.revoke_user_sessions(alice.id) == 2
    assert memory_db.sessions == {}
    with pytest.raises(UnauthorizedError):
        await auth_service.refresh(first.refresh_token)

    third = await auth_service.login("alice", PASSWORD)
    token_hash = auth_service.codec.hash_refresh_token(third.refresh_token)
    memory_db.refresh_tokens[token_hash].expires_at = utcnow() - timedelta(hours=1)

    assert await auth_service.purge_expired_tokens() == 1
    assert memory_db.refresh_tokens == {}
