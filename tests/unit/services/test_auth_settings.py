from datetime import timedelta

import pytest
from pydantic import ValidationError

from src.app.services.auth_settings import AuthSettings, parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("30s", timedelta(seconds=30)),
        ("15m", timedelta(minutes=15)),
        ("1h", timedelta(hours=1)),
        ("7d", timedelta(days=7)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "15", "m15", "15w", "1.5h", "-1d", None])
def test_parse_duration_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_from_config_reads_application_config():
    class Config:
        JWT_SECRET = "s3cret"
        JWT_ALGORITHM = "HS512"
        JWT_ACCESS_EXPIRY = "5m"
        JWT_REFRESH_EXPIRY = "30d"
        MAX_FAILED_LOGINS = 3

    settings = AuthSettings.from_config(Config)

    assert settings.jwt_secret == "s3cret"
    assert settings.jwt_algorithm == "HS512"
    assert settings.access_expiry == timedelta(minutes=5)
    assert settings.refresh_expiry == timedelta(days=30)
    assert settings.max_failed_logins == 3


def test_from_config_defaults():
    class Config:
        JWT_SECRET = "s3cret"

    settings = AuthSettings.from_config(Config)

    assert settings.jwt_algorithm == "HS256"
    assert settings.access_expiry == timedelta(minutes=15)
    assert settings.refresh_expiry == timedelta(days=7)
    assert settings.max_failed_logins == 5


def test_from_config_invalid_expiry_fails_at_startup():
    class Config:
        JWT_SECRET = "s3cret"
        JWT_ACCESS_EXPIRY = "fifteen minutes"

    with pytest.raises(ValueError):
        AuthSettings.from_config(Config)


def test_settings_are_immutable():
    settings = AuthSettings(jwt_secret="s3cret")

    with pytest.raises(ValidationError):
        settings.jwt_secret = "other"
