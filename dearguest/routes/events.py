"""Public routes for the guest-facing site. No authentication."""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from dearguest.core.database import get_session
from dearguest.invites import events, guests, rsvps
from dearguest.invites.access import get_event_by_slug
from dearguest.schemas import (
    Created,
    EventPublic,
    EventSummary,
    GuestPublic,
    OkResponse,
    RsvpCreate,
    RsvpStatus,
)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=list[EventSummary])
async def list_events(session: Session = Depends(get_session)):
    """List event slugs and names, newest first."""
    return [EventSummary.model_validate(event) for event in events.list_public_events(session)]


@router.get("/{slug}", response_model=EventPublic)
async def get_event(slug: str, session: Session = Depends(get_session)):
    """Event name and config for rendering the invitation page."""
    return EventPublic.from_event(get_event_by_slug(session, slug))


@router.get("/{slug}/guest/{token}", response_model=GuestPublic)
async def get_guest(slug: str, token: str, session: Session = Depends(get_session)):
    """Resolve a dedicated invite link to its guest. 404 for an unknown event or token."""
    return GuestPublic.model_validate(guests.get_guest_by_token(session, slug, token))


@router.post("/{slug}/guest/{token}/opened", response_model=OkResponse)
async def guest_opened(slug: str, token: str, session: Session = Depends(get_session)):
    """
    Record that a guest opened their invite link.

    Idempotent: the first call stores the time, later calls change nothing
    and still return 200.
    """
    guests.mark_opened(session, slug, token)
    return OkResponse()


@router.post("/{slug}/rsvp", response_model=Created, status_code=201)
async def submit_rsvp(slug: str, body: RsvpCreate, session: Session = Depends(get_session)):
    """
    Submit an RSVP through a dedicated or the shared link.

    ``guestName`` and ``attendance`` ("yes" or "no") are required. Each
    submission creates a new row; clients check ``rsvp-status`` first.
    """
    rsvp = rsvps.submit_rsvp(session, slug, body.to_submission())
    return Created(id=rsvp.id)


@router.get("/{slug}/rsvp-status", response_model=RsvpStatus)
async def rsvp_status(
    slug: str,
    guest_id: str | None = Query(default=None, alias="guestId"),
    session: Session = Depends(get_session),
):
    """Whether the guest (by id or token in ``guestId``) has already responded."""
    return RsvpStatus(found=rsvps.has_responded(session, slug, guest_id))
