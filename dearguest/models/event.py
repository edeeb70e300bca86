"""Event model for invitation campaigns.

This module defines the Event model, the central entity organizers work
with. An event owns its guests, RSVPs and admin assignments, and carries
the invitation page configuration as an opaque JSON document.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from dearguest.models.guest import Guest
    from dearguest.models.rsvp import Rsvp


class Event(SQLModel, table=True):
    """One organizer's invitation campaign, e.g. a wedding.

    The slug is embedded in every link shared with guests, so changing it
    is treated as a destructive operation (see ``invites.events``).

    Attributes:
        id: Unique identifier (UUID).
        slug: URL segment, unique across all events.
        name: Display name shown in the admin dashboard.
        config: JSON-serialized invitation content (theme, copy, sections,
            dates, images). Stored and returned verbatim, never interpreted
            by the domain layer.
        created_by: User who created the event.
        owner_id: User who owns the event. Older rows may leave this unset,
            in which case the creator is the owner.
        created_at: When the event was created.
        guests: Invitees with their personal links.
        rsvps: Submitted responses.
    """
    __tablename__ = "events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(index=True, unique=True)
    name: str
    config: str = Field(default="{}")
    created_by: UUID | None = Field(default=None, foreign_key="users.id")
    owner_id: UUID | None = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationships
    guests: list["Guest"] = Relationship(back_populates="event")
    rsvps: list["Rsvp"] = Relationship(back_populates="event")

    @property
    def effective_owner_id(self) -> UUID | None:
        return self.owner_id or self.created_by
