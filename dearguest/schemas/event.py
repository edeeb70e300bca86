"""
Event-related schemas
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import field_validator

from dearguest.invites.access import EventAccess
from dearguest.invites.events import EventStats
from dearguest.models import Event, User
from dearguest.schemas.auth import UserPublic
from dearguest.schemas.common import CamelModel, decode_config, encode_config


class EventCreate(CamelModel):
    """Schema for creating an event"""
    slug: str
    name: str
    config: Any = None
    owner_id: UUID | None = None
    owner_email: str | None = None
    owner_password: str | None = None

    @field_validator("config")
    @classmethod
    def encode(cls, value):
        return None if value is None else encode_config(value)


class EventUpdate(CamelModel):
    """Partial event update. Omitted or null fields are left unchanged."""
    name: str | None = None
    config: Any = None
    slug: str | None = None
    confirm_remove_guests_and_rsvps: bool = False

    @field_validator("config")
    @classmethod
    def encode(cls, value):
        return None if value is None else encode_config(value)


class EventSummary(CamelModel):
    """Event as shown in listings"""
    id: UUID
    slug: str
    name: str
    created_at: datetime


class AdminEventSummary(EventSummary):
    """Event as listed in the admin dashboard"""
    created_by: UUID | None = None
    owner_id: UUID | None = None


class EventPublic(CamelModel):
    """Event name and config for rendering the invitation"""
    id: UUID
    slug: str
    name: str
    config: Any

    @classmethod
    def from_event(cls, event: Event) -> "EventPublic":
        return cls(id=event.id, slug=event.slug, name=event.name, config=decode_config(event.config))


class EventCreated(CamelModel):
    """Response for a newly created event"""
    id: UUID
    slug: str
    name: str
    owner_id: UUID | None
    created_owner: UserPublic | None = None


class EventDetail(CamelModel):
    """Event detail with counts for the admin dashboard"""
    id: UUID
    slug: str
    name: str
    config: Any
    created_at: datetime
    guest_count: int
    rsvp_count: int
    coming_count: int
    access_level: str
    owner_id: UUID | None = None
    owner_email: str | None = None

    @classmethod
    def build(cls, access: EventAccess, stats: EventStats, owner: User | None) -> "EventDetail":
        event = access.event
        detail = cls(
            id=event.id,
            slug=event.slug,
            name=event.name,
            config=decode_config(event.config),
            created_at=event.created_at,
            guest_count=stats.guest_count,
            rsvp_count=stats.rsvp_count,
            coming_count=stats.coming_count,
            access_level=access.level.value,
        )
        # Owner identity is only disclosed to the system admin
        if access.is_system_admin and owner is not None:
            detail.owner_id = owner.id
            detail.owner_email = owner.email
        return detail


class SlugUpdated(CamelModel):
    """Response for an event update"""
    ok: bool = True
    slug: str


class AdminAssign(CamelModel):
    """Assign an event admin"""
    user_id: str
