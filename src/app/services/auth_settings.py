"""
Auth Settings

Immutable signing and expiry configuration, built once at startup and
passed explicitly to the token codec and the use cases.
"""

import re
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from src.domain.lockout import MAX_FAILED_LOGINS

_DURATION_PATTERN = re.compile(r"^(\d+)([smhd])$")
_DURATION_UNITS = {
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as "15m", "7d", "1h" or "30s".

    Raises:
        ValueError: If the string is not <digits><unit> with unit in s/m/h/d
    """
    match = _DURATION_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid duration format: {value!r}")
    return int(match.group(1)) * _DURATION_UNITS[match.group(2)]


class AuthSettings(BaseModel):
    """Signing key, algorithm, token lifetimes and lockout threshold"""

    model_config = ConfigDict(frozen=True)

    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = "HS256"
    access_expiry: timedelta = timedelta(minutes=15)
    refresh_expiry: timedelta = timedelta(days=7)
    max_failed_logins: int = Field(default=MAX_FAILED_LOGINS, ge=1)

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        """Build settings from an ApplicationConfig-like object"""
        return cls(
            jwt_secret=config.JWT_SECRET,
            jwt_algorithm=getattr(config, "JWT_ALGORITHM", "HS256"),
            access_expiry=parse_duration(getattr(config, "JWT_ACCESS_EXPIRY", "15m")),
            refresh_expiry=parse_duration(getattr(config, "JWT_REFRESH_EXPIRY", "7d")),
            max_failed_logins=int(
                getattr(config, "MAX_FAILED_LOGINS", MAX_FAILED_LOGINS)
            ),
        )
