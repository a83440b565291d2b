"""
User Entity

Represents a principal that can authenticate with a name and password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - a principal owning sessions.

    Business Rules:
    - Name is unique and matched case-sensitively on login
    - Password stored as bcrypt hash, read only through the credential store
    - Blocked after 5 consecutive failed logins, no automatic unblock
    - Service accounts cannot log in interactively
    - Provisioned outside this service
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output is 60 chars

    # Account status
    active: bool = Field(default=True)
    blocked: bool = Field(default=False)
    blocked_since: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    failed_login_count: int = Field(default=0)
    is_service_account: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_blocked", "blocked"),)
