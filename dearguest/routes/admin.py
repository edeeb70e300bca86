"""Admin routes for events, users, assignments and leads.

Every route here requires a bearer token. Routes that target one event
take the event id or slug and resolve the caller's access through
``get_event_access``; operations reserved for the system admin check it
on the resolved access, so a missing event is reported before a
permission problem.

Handlers that hash passwords are plain functions so FastAPI runs them in
its threadpool instead of on the event loop.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dearguest.core.config import Settings
from dearguest.core.database import get_session
from dearguest.core.security import Principal, get_current_principal, get_settings
from dearguest.invites import accounts, events, leads
from dearguest.invites.access import EventAccess, require_main_admin, resolve_event_access
from dearguest.schemas import (
    AdminAssign,
    AdminEventSummary,
    CredentialsUpdate,
    EventCreate,
    EventCreated,
    EventDetail,
    EventUpdate,
    LeadRead,
    OkResponse,
    SlugUpdated,
    UserCreate,
    UserDetail,
    UserPublic,
)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(get_current_principal)],
)


def get_event_access(
    event_ref: str,
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
) -> EventAccess:
    """Dependency resolving the ``event_ref`` path segment for the caller."""
    return resolve_event_access(session, principal, event_ref)


# Events


@router.post("/events", response_model=EventCreated, status_code=201)
def create_event(
    body: EventCreate,
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """
    Create an event (main admin only).

    With ``ownerEmail`` and ``ownerPassword`` a new event_admin account is
    created, made owner, and assigned to the event. With ``ownerId`` an
    existing user owns it. Otherwise the creator is the owner.
    Returns 409 when the slug or owner email is taken.
    """
    require_main_admin(principal)
    event, created_owner = events.create_event(
        session,
        principal,
        slug=body.slug,
        name=body.name,
        config=body.config,
        owner_id=body.owner_id,
        owner_email=body.owner_email,
        owner_password=body.owner_password,
        rounds=settings.bcrypt_rounds,
    )
    return EventCreated(
        id=event.id,
        slug=event.slug,
        name=event.name,
        owner_id=event.owner_id,
        created_owner=UserPublic.model_validate(created_owner) if created_owner else None,
    )


@router.get("/events", response_model=list[AdminEventSummary])
async def list_events(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    """List the events the caller may administer, newest first."""
    return [
        AdminEventSummary.model_validate(event)
        for event in events.list_visible_events(session, principal)
    ]


@router.get("/events/{event_ref}", response_model=EventDetail)
async def event_detail(
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """
    Event detail with guest, RSVP and attending counts.

    The owner's id and email are only included for the main admin.
    """
    stats = events.event_stats(session, access.event)
    owner = events.get_owner(session, access.event) if access.is_system_admin else None
    return EventDetail.build(access, stats, owner)


@router.patch("/events/{event_ref}", response_model=SlugUpdated)
async def update_event(
    body: EventUpdate,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """
    Update an event's config, name or slug.

    Config changes are open to anyone with access to the event; name and
    slug changes are main admin only (403). A slug change on an event with
    guests or RSVPs returns 400 with ``requireConfirm`` and the counts
    until it is re-sent with ``confirmRemoveGuestsAndRsvps: true``, which
    deletes them.
    """
    event = events.update_event(
        session,
        access,
        name=body.name,
        config=body.config,
        slug=body.slug,
        confirm_remove_guests_and_rsvps=body.confirm_remove_guests_and_rsvps,
    )
    return SlugUpdated(slug=event.slug)


@router.delete("/events/{event_ref}", response_model=OkResponse)
async def delete_event(
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """Delete an event with its guests, RSVPs and assignments (main admin only)."""
    events.delete_event(session, access)
    return OkResponse()


@router.patch("/events/{event_ref}/owner", response_model=OkResponse)
def update_event_owner(
    body: CredentialsUpdate,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Change the event owner's login email and/or password (main admin only)."""
    events.update_owner_credentials(
        session, access, body.email, body.new_password, settings.bcrypt_rounds
    )
    return OkResponse()


# Assignments


@router.get("/events/{event_ref}/admins", response_model=list[UserPublic])
async def list_event_admins(
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """List users assigned to the event (main admin only)."""
    return [
        UserPublic.model_validate(user)
        for user in events.list_assigned_admins(session, access)
    ]


@router.post("/events/{event_ref}/admins", response_model=OkResponse, status_code=201)
async def assign_event_admin(
    body: AdminAssign,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """Give a user admin access to the event (main admin only). 409 if already assigned."""
    events.assign_admin(session, access, body.user_id)
    return OkResponse()


@router.delete("/events/{event_ref}/admins/{user_id}", response_model=OkResponse)
async def remove_event_admin(
    user_id: str,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """Take a user's admin access to the event away (main admin only)."""
    events.unassign_admin(session, access, user_id)
    return OkResponse()


# Users


@router.post("/users", response_model=UserPublic, status_code=201)
def create_user(
    body: UserCreate,
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Create a main_admin or event_admin account (main admin only)."""
    require_main_admin(principal)
    user = accounts.create_user(
        session, body.email, body.password, body.role, settings.bcrypt_rounds
    )
    return UserPublic.model_validate(user)


@router.get("/users", response_model=list[UserDetail])
async def list_users(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    """List every account (main admin only)."""
    require_main_admin(principal)
    return [UserDetail.model_validate(user) for user in accounts.list_users(session)]


# Leads


@router.get("/early-access", response_model=list[LeadRead])
async def list_early_access(
    principal: Principal = Depends(get_current_principal),
    session: Session = Depends(get_session),
):
    """List early-access sign-ups, newest first (main admin only)."""
    require_main_admin(principal)
    return [LeadRead.model_validate(lead) for lead in leads.list_leads(session)]
