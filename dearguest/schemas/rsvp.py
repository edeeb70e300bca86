"""
RSVP and early-access schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from dearguest.invites.guests import MAX_EXTRA_GUESTS
from dearguest.invites.rsvps import RsvpSubmission
from dearguest.schemas.common import CamelModel


class RsvpCreate(CamelModel):
    """RSVP form submission"""
    guest_id: str | None = None
    guest_name: str
    partner_name: str | None = None
    attendance: str
    extra_guests: int | None = Field(default=0, le=MAX_EXTRA_GUESTS)
    favorite_songs: list[str | None] = Field(default_factory=list)
    reaction: str | None = Field(default=None, max_length=32)
    message: str | None = None

    def to_submission(self) -> RsvpSubmission:
        return RsvpSubmission(
            guest_id=self.guest_id,
            guest_name=self.guest_name,
            partner_name=self.partner_name,
            attendance=self.attendance,
            extra_guests=self.extra_guests or 0,
            favorite_songs=list(self.favorite_songs),
            reaction=self.reaction,
            message=self.message,
        )


class RsvpStatus(CamelModel):
    """Whether the guest has already responded"""
    found: bool


class RsvpRead(CamelModel):
    """Full RSVP row for the admin dashboard"""
    id: UUID
    guest_id: UUID | None = None
    guest_name: str
    partner_name: str | None = None
    attendance: str
    extra_guests: int
    song1: str | None = None
    song2: str | None = None
    reaction: str | None = None
    message: str | None = None
    submission_time: datetime


class LeadCreate(CamelModel):
    """Early-access form submission"""
    name: str | None = None
    email: str | None = None
    event_type: str | None = None
    plan: str | None = None
    city: str | None = None


class LeadRead(CamelModel):
    """Early-access lead as listed for the main admin"""
    id: UUID
    name: str
    email: str
    event_type: str | None = None
    plan: str | None = None
    city: str | None = None
    created_at: datetime
