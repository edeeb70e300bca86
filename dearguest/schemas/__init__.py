"""
Pydantic schemas for request and response bodies
"""

from dearguest.schemas.auth import (
    CredentialsUpdate,
    LoginRequest,
    LoginResponse,
    UserCreate,
    UserDetail,
    UserPublic,
)
from dearguest.schemas.common import Created, OkResponse
from dearguest.schemas.event import (
    AdminAssign,
    AdminEventSummary,
    EventCreate,
    EventCreated,
    EventDetail,
    EventPublic,
    EventSummary,
    EventUpdate,
    SlugUpdated,
)
from dearguest.schemas.guest import (
    GuestCreate,
    GuestCreated,
    GuestListItem,
    GuestPublic,
    GuestUpdate,
)
from dearguest.schemas.rsvp import (
    LeadCreate,
    LeadRead,
    RsvpCreate,
    RsvpRead,
    RsvpStatus,
)

__all__ = [
    "AdminAssign",
    "AdminEventSummary",
    "Created",
    "CredentialsUpdate",
    "EventCreate",
    "EventCreated",
    "EventDetail",
    "EventPublic",
    "EventSummary",
    "EventUpdate",
    "GuestCreate",
    "GuestCreated",
    "GuestListItem",
    "GuestPublic",
    "GuestUpdate",
    "LeadCreate",
    "LeadRead",
    "LoginRequest",
    "LoginResponse",
    "OkResponse",
    "RsvpCreate",
    "RsvpRead",
    "RsvpStatus",
    "SlugUpdated",
    "UserCreate",
    "UserDetail",
    "UserPublic",
]
