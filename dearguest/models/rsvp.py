"""RSVP model for submitted responses.

RSVPs are append-only: every submission creates a new row. A row may be
linked to a Guest (dedicated invite link) or not (shared public link).
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from dearguest.models.event import Event


class Rsvp(SQLModel, table=True):
    """One submitted response for an event.

    Attributes:
        id: Unique identifier (UUID).
        event_id: Foreign key to the parent Event.
        guest_id: The guest who responded through their dedicated link, or
            None for responses through the public link. Cleared when the
            guest is deleted.
        guest_name: Name given on the form.
        partner_name: Partner name given on the form, if any.
        attendance: "yes" or "no".
        extra_guests: Number of additional people the guest brings.
        song1: First song request.
        song2: Second song request.
        reaction: Short reaction, usually an emoji.
        message: Free-text message to the hosts.
        submission_time: When the response was submitted.
        event: Reference to the parent Event object.
    """
    __tablename__ = "rsvps"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="events.id", index=True, ondelete="CASCADE")
    guest_id: UUID | None = Field(
        default=None, foreign_key="guests.id", index=True, ondelete="SET NULL"
    )
    guest_name: str
    partner_name: str | None = None
    attendance: str
    extra_guests: int = Field(default=0)
    song1: str | None = None
    song2: str | None = None
    reaction: str | None = None
    message: str | None = None
    submission_time: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="rsvps")
