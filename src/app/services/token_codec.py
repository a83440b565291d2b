"""
Token Codec

Issues and parses the two credential types handed to clients:
- access token: HS256 JWT carrying user, session and role names
- refresh token: opaque random secret, stored only as its SHA-256 hash
"""

import hashlib
import secrets
from datetime import UTC, datetime
from typing import List, Optional
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from src.app.errors import InvalidTokenError
from src.app.services.auth_settings import AuthSettings

REFRESH_TOKEN_BYTES = 48
CSRF_TOKEN_BYTES = 32


class AccessTokenClaims(BaseModel):
    """Claims carried by an access token (never persisted)"""

    user_id: UUID
    session_id: UUID
    roles: List[str] = Field(default_factory=list)
    module_roles: List[str] = Field(default_factory=list)
    expires_at: Optional[datetime] = None


class TokenCodec:
    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def encode_access_token(self, claims: AccessTokenClaims) -> str:
        """
        Sign claims into a JWT access token.

        Args:
            claims: User, session and role names to embed

        Returns:
            JWT token string, expiring after settings.access_expiry
        """
        now = datetime.now(UTC)
        payload = {
            "user_id": str(claims.user_id),
            "session_id": str(claims.session_id),
            "roles": list(claims.roles),
            "module_roles": list(claims.module_roles),
            "exp": now + self.settings.access_expiry,
            "iat": now,
        }
        return jwt.encode(
            payload, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm
        )

    def decode_access_token(self, token: str) -> AccessTokenClaims:
        """
        Verify and decode an access token.

        Raises:
            InvalidTokenError: Bad signature, expired, or missing claims
        """
        try:
            payload = jwt.decode(
                token, self.settings.jwt_secret, algorithms=[self.settings.jwt_algorithm]
            )
            return AccessTokenClaims.model_validate(
                {**payload, "expires_at": payload.get("exp")}
            )
        except (JWTError, PydanticValidationError) as exc:
            raise InvalidTokenError("Invalid or expired token") from exc

    @staticmethod
    def generate_refresh_token() -> str:
        return secrets.token_hex(REFRESH_TOKEN_BYTES)

    @staticmethod
    def hash_refresh_token(refresh_token: str) -> str:
        return hashlib.sha256(refresh_token.encode()).hexdigest()

    @staticmethod
    def generate_csrf_token() -> str:
        return secrets.token_hex(CSRF_TOKEN_BYTES)
