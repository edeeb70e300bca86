"""Join table granting an event_admin access to one event."""

from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Field, SQLModel


class EventAdmin(SQLModel, table=True):
    """Assignment of a user to an event they do not own.

    Only a main_admin creates or removes these rows. The (event_id, user_id)
    pair is the primary key, so a user is assigned to an event at most once.
    """
    __tablename__ = "event_admins"

    event_id: UUID = Field(foreign_key="events.id", primary_key=True, ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")
    added_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
