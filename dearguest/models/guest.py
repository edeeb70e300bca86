"""Guest model for invitees with a dedicated invite link.

Each guest gets an unguessable token that is embedded in their personal
invite URL (``/e/{slug}/invite/{token}``). The token, not the database id,
is what identifies the guest to the public site.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from dearguest.models.event import Event


class Guest(SQLModel, table=True):
    """An invitee of one event.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the parent Event.
        token: Opaque random token used in the invite link (unique).
        name: Name of the invitee.
        partner_name: Name of the invitee's partner, if invited as a couple.
        max_extra_guests: Cap on the "+N" the guest may bring. None means
            no cap was set.
        first_opened_at: When the invite link was first opened. Set once
            and never changed afterwards.
        created_at: When the guest was added.
        event: Reference to the parent Event object.
    """
    __tablename__ = "guests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="events.id", index=True, ondelete="CASCADE")
    token: str = Field(index=True, unique=True)
    name: str
    partner_name: str | None = None
    max_extra_guests: int | None = None
    first_opened_at: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="guests")
