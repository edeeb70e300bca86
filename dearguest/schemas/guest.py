"""
Guest-related schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from dearguest.invites.guests import MAX_EXTRA_GUESTS, GuestRow, invite_path
from dearguest.models import Guest
from dearguest.schemas.common import CamelModel


class GuestCreate(CamelModel):
    """Schema for creating a guest"""
    name: str
    partner_name: str | None = None
    max_extra_guests: int | None = Field(default=None, ge=0, le=MAX_EXTRA_GUESTS)


class GuestUpdate(CamelModel):
    """Schema for updating a guest. Only the fields sent are changed."""
    name: str | None = None
    partner_name: str | None = None
    max_extra_guests: int | None = Field(default=None, ge=0, le=MAX_EXTRA_GUESTS)


class GuestPublic(CamelModel):
    """Guest as seen through their dedicated invite link"""
    id: UUID
    token: str
    name: str
    partner_name: str | None = None
    max_extra_guests: int | None = None


class GuestCreated(GuestPublic):
    """Newly created guest with their invite link"""
    invite_url: str

    @classmethod
    def from_guest(cls, guest: Guest, event_slug: str) -> "GuestCreated":
        return cls(
            id=guest.id,
            token=guest.token,
            name=guest.name,
            partner_name=guest.partner_name,
            max_extra_guests=guest.max_extra_guests,
            invite_url=invite_path(event_slug, guest.token),
        )


class GuestListItem(GuestCreated):
    """Guest row in the admin dashboard"""
    first_opened_at: datetime | None = None
    created_at: datetime
    has_rsvp: bool

    @classmethod
    def from_row(cls, row: GuestRow, event_slug: str) -> "GuestListItem":
        guest = row.guest
        return cls(
            **GuestCreated.from_guest(guest, event_slug).model_dump(),
            first_opened_at=guest.first_opened_at,
            created_at=guest.created_at,
            has_rsvp=row.has_rsvp,
        )
