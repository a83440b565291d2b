"""
Session Entity

Server-side record of one login lineage.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - binds a user to a login across token rotations.

    Business Rules:
    - Created on successful login, one user may hold many sessions
    - csrf_token is returned to the client once, for double-submit checks
    - last_active_at bumped on every successful refresh
    - Deleted on logout, never reactivated
    - Deleted together with its user (cascade)
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(
        foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True
    )
    csrf_token: str = Field(max_length=64)

    # Timestamps
    last_active_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
