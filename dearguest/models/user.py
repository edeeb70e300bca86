"""User model for admin accounts.

Users are the people who log in to the admin dashboard. A ``main_admin``
sees every event; an ``event_admin`` only sees events it owns or has been
assigned to through an EventAdmin row.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Role(str, Enum):
    MAIN_ADMIN = "main_admin"
    EVENT_ADMIN = "event_admin"


class User(SQLModel, table=True):
    """An account that can log in to the admin dashboard.

    Attributes:
        id: Unique identifier (UUID).
        email: Login email, unique across all users.
        password_hash: bcrypt hash of the password. Never the password itself.
        role: Either "main_admin" or "event_admin".
        created_at: When the account was created.
    """
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str = Field(default=Role.EVENT_ADMIN.value)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_main_admin(self) -> bool:
        return self.role == Role.MAIN_ADMIN.value
