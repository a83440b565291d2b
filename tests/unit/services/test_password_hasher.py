import pytest

from src.app.services.password_hasher import (
    MalformedHashError,
    burn_verification_time,
    hash_password,
    verify_password,
)


def test_verify_matching_password():
    stored = hash_password("correct horse", rounds=4)

    assert verify_password("correct horse", stored) is True


def test_verify_wrong_password_returns_false():
    stored = hash_password("correct horse", rounds=4)

    assert verify_password("battery staple", stored) is False


def test_hash_is_salted():
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_malformed_hash_is_hard_error():
    with pytest.raises(MalformedHashError):
        verify_password("anything", "not-a-bcrypt-hash")


def test_burn_verification_time_does_not_raise():
    burn_verification_time("whatever")
