"""Admin routes for an event's guests and RSVPs."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dearguest.core.database import get_session
from dearguest.core.security import get_current_principal
from dearguest.invites import guests, rsvps
from dearguest.invites.access import EventAccess
from dearguest.routes.admin import get_event_access
from dearguest.schemas import (
    GuestCreate,
    GuestCreated,
    GuestListItem,
    GuestUpdate,
    OkResponse,
    RsvpRead,
)

router = APIRouter(
    prefix="/api/admin/events/{event_ref}",
    tags=["admin"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("/guests", response_model=list[GuestListItem])
async def list_guests(
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """
    List the event's guests by name.

    Each row carries the invite link, when it was first opened, and
    whether the guest has responded.
    """
    return [
        GuestListItem.from_row(row, access.event.slug)
        for row in guests.list_guests(session, access.event)
    ]


@router.post("/guests", response_model=GuestCreated, status_code=201)
async def create_guest(
    body: GuestCreate,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """Add a guest and return their dedicated invite link."""
    guest = guests.create_guest(
        session,
        access.event,
        name=body.name,
        partner_name=body.partner_name,
        max_extra_guests=body.max_extra_guests,
    )
    return GuestCreated.from_guest(guest, access.event.slug)


@router.patch("/guests/{guest_id}", response_model=OkResponse)
async def update_guest(
    guest_id: str,
    body: GuestUpdate,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """
    Update a guest's name, partner or extra-guest cap.

    Only the fields present in the body change; sending ``null`` for
    ``partnerName`` or ``maxExtraGuests`` clears them. An empty body is 400.
    """
    changes = {field: getattr(body, field) for field in body.model_fields_set}
    guests.update_guest(session, access.event, guest_id, **changes)
    return OkResponse()


@router.delete("/guests/{guest_id}", response_model=OkResponse)
async def delete_guest(
    guest_id: str,
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """Delete a guest. Their RSVPs are kept."""
    guests.delete_guest(session, access.event, guest_id)
    return OkResponse()


@router.get("/rsvps", response_model=list[RsvpRead])
async def list_rsvps(
    access: EventAccess = Depends(get_event_access),
    session: Session = Depends(get_session),
):
    """List every RSVP of the event, newest first."""
    return [RsvpRead.model_validate(rsvp) for rsvp in rsvps.list_rsvps(session, access.event.id)]
