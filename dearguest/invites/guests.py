"""Guests and their dedicated invite links.

A guest is identified to the public site only by an unguessable token.
Tokens come from ``secrets.token_urlsafe``; with 96 random bits a collision
across any realistic guest list is negligible, and the unique index on
``guests.token`` turns the remaining case into an error instead of a
shared link.
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import Session, select, update

from dearguest.core.errors import BadRequest, NotFound
from dearguest.invites.access import get_event_by_slug, parse_uuid
from dearguest.models import Event, Guest, Rsvp

logger = logging.getLogger(__name__)

TOKEN_BYTES = 12

# Upper bound for extra guests, well inside SQLite's INTEGER range
MAX_EXTRA_GUESTS = 1000

_UNSET = object()


@dataclass
class GuestRow:
    """A guest as listed in the admin dashboard."""

    guest: Guest
    has_rsvp: bool


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def invite_path(event_slug: str, token: str) -> str:
    return f"/e/{event_slug}/invite/{token}"


def _clean_name(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _check_max_extra(value: int | None):
    if value is not None and value < 0:
        raise BadRequest("maxExtraGuests must not be negative")
    if value is not None and value > MAX_EXTRA_GUESTS:
        raise BadRequest(f"maxExtraGuests must be at most {MAX_EXTRA_GUESTS}")


def create_guest(
    session: Session,
    event: Event,
    name: str,
    partner_name: str | None = None,
    max_extra_guests: int | None = None,
) -> Guest:
    name = _clean_name(name)
    if not name:
        raise BadRequest("name required")
    _check_max_extra(max_extra_guests)

    guest = Guest(
        event_id=event.id,
        token=generate_token(),
        name=name,
        partner_name=_clean_name(partner_name),
        max_extra_guests=max_extra_guests,
    )
    session.add(guest)
    session.commit()
    session.refresh(guest)
    logger.info(f"Added guest {guest.id} to event {event.slug}")
    return guest


def list_guests(session: Session, event: Event) -> list[GuestRow]:
    """Guests of the event ordered by name, each flagged with whether they responded."""
    responded = set(
        session.exec(
            select(Rsvp.guest_id)
            .where(Rsvp.event_id == event.id)
            .where(Rsvp.guest_id.is_not(None))
        ).all()
    )
    guests = session.exec(
        select(Guest).where(Guest.event_id == event.id).order_by(Guest.name)
    ).all()
    return [GuestRow(guest=guest, has_rsvp=guest.id in responded) for guest in guests]


def get_guest_or_404(session: Session, event: Event, guest_id: str | UUID) -> Guest:
    if not isinstance(guest_id, UUID):
        guest_id = parse_uuid(guest_id)
    guest = session.get(Guest, guest_id) if guest_id else None
    if guest is None or guest.event_id != event.id:
        raise NotFound("Guest not found")
    return guest


def update_guest(
    session: Session,
    event: Event,
    guest_id: str | UUID,
    name=_UNSET,
    partner_name=_UNSET,
    max_extra_guests=_UNSET,
) -> Guest:
    """
    Update the given fields of a guest in place.

    Fields left at their default are untouched; passing None for
    ``partner_name`` or ``max_extra_guests`` clears them.
    """
    if name is _UNSET and partner_name is _UNSET and max_extra_guests is _UNSET:
        raise BadRequest("No fields to update")

    guest = get_guest_or_404(session, event, guest_id)

    if name is not _UNSET:
        name = _clean_name(name)
        if not name:
            raise BadRequest("name must not be empty")
    if max_extra_guests is not _UNSET:
        _check_max_extra(max_extra_guests)

    if name is not _UNSET:
        guest.name = name
    if partner_name is not _UNSET:
        guest.partner_name = _clean_name(partner_name)
    if max_extra_guests is not _UNSET:
        guest.max_extra_guests = max_extra_guests

    session.add(guest)
    session.commit()
    session.refresh(guest)
    return guest


def delete_guest(session: Session, event: Event, guest_id: str | UUID):
    """Delete a guest. Their RSVPs stay, unlinked from the guest."""
    guest = get_guest_or_404(session, event, guest_id)
    session.exec(update(Rsvp).where(Rsvp.guest_id == guest.id).values(guest_id=None))
    session.delete(guest)
    session.commit()
    logger.info(f"Deleted guest {guest_id} from event {event.slug}")


def get_guest_by_token(session: Session, slug: str, token: str) -> Guest:
    """Public lookup for a dedicated invite link. Unknown slug or token is NotFound."""
    event = get_event_by_slug(session, slug)
    guest = session.exec(
        select(Guest).where(Guest.event_id == event.id, Guest.token == token)
    ).first()
    if guest is None:
        raise NotFound("Guest not found")
    return guest


def mark_opened(session: Session, slug: str, token: str) -> Guest:
    """
    Record that the guest opened their invite link.

    Only the first call sets ``first_opened_at``; later calls leave the
    timestamp alone and still succeed. The update is conditional on the
    column being NULL so two concurrent first opens cannot both write it.
    """
    guest = get_guest_by_token(session, slug, token)
    if guest.first_opened_at is None:
        result = session.exec(
            update(Guest)
            .where(Guest.id == guest.id, Guest.first_opened_at.is_(None))
            .values(first_opened_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        session.commit()
        if result.rowcount:
            logger.info(f"Guest {guest.id} opened their invite for the first time")
        session.refresh(guest)
    return guest
