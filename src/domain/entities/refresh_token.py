"""
RefreshToken Entity

Stores the one-way hash of an opaque refresh secret.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - one live record per session.

    Business Rules:
    - Only the SHA-256 hash of the secret is stored
    - Rotated on every refresh (old row deleted, new row inserted)
    - Deleted together with its session (cascade)
    - Expired rows are rejected and purged
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )
    session_id: UUID = Field(
        foreign_key="sessions.id", ondelete="CASCADE", nullable=False, index=True
    )

    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_refresh_token_expires_at", "expires_at"),)
