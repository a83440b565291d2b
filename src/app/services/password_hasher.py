"""
Credential Verifier

bcrypt password hashing and verification.
"""

from functools import lru_cache

import bcrypt


class MalformedHashError(ValueError):
    """Stored hash is not a valid bcrypt hash"""


def hash_password(plaintext: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt (cost factor 12 by default)"""
    return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds)).decode()


def verify_password(plaintext: str, stored_hash: str) -> bool:
    """
    Constant-time comparison of a password against a bcrypt hash.

    Returns False on mismatch. Raises MalformedHashError if stored_hash
    cannot be parsed as a bcrypt hash.
    """
    try:
        return bcrypt.checkpw(plaintext.encode(), stored_hash.encode())
    except ValueError as exc:
        raise MalformedHashError("Stored password hash is malformed") from exc


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


def burn_verification_time(plaintext: str) -> None:
    """Spend one bcrypt comparison so unknown users take as long as known ones"""
    bcrypt.checkpw(plaintext.encode(), _dummy_hash())
