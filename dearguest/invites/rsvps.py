"""RSVP submission, status checks and headcounts.

Every submission appends a new row; nothing is updated in place. The
``has_responded`` check is what the invite page calls before showing the
form, but the write path does not enforce it, so a guest who submits twice
ends up with two rows and is counted twice.
"""
import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlmodel import Session, case, func, or_, select

from dearguest.core.errors import BadRequest, NotFound
from dearguest.invites.access import get_event_by_slug, parse_uuid
from dearguest.invites.guests import MAX_EXTRA_GUESTS
from dearguest.models import Guest, Rsvp

logger = logging.getLogger(__name__)

ATTENDANCE_CHOICES = ("yes", "no")


@dataclass
class RsvpSubmission:
    """The fields a guest fills in on the RSVP form."""

    guest_name: str
    attendance: str
    guest_id: str | None = None
    partner_name: str | None = None
    extra_guests: int = 0
    favorite_songs: list[str | None] = field(default_factory=list)
    reaction: str | None = None
    message: str | None = None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def find_guest(session: Session, event_id: UUID, guest_ref: str) -> Guest | None:
    """Find a guest of the event by id or by invite token."""
    condition = Guest.token == guest_ref
    guest_id = parse_uuid(guest_ref)
    if guest_id is not None:
        condition = or_(Guest.id == guest_id, condition)
    statement = select(Guest).where(Guest.event_id == event_id).where(condition)
    return session.exec(statement).first()


def submit_rsvp(session: Session, slug: str, submission: RsvpSubmission) -> Rsvp:
    """
    Record an RSVP for the event with this slug.

    ``guest_id`` may be the guest's id or invite token; when given it must
    belong to this event. When that guest has a ``max_extra_guests`` cap,
    ``extra_guests`` may not exceed it.

    Raises:
        NotFound: unknown event, or a guest_id that is not a guest of it.
        BadRequest: missing name, attendance other than yes/no, or a
            negative, too large or over-the-cap number of extra guests.
    """
    event = get_event_by_slug(session, slug)

    guest_name = _clean(submission.guest_name)
    if not guest_name or not submission.attendance:
        raise BadRequest("guestName and attendance required")
    if submission.attendance not in ATTENDANCE_CHOICES:
        raise BadRequest("attendance must be yes or no")

    extra_guests = submission.extra_guests or 0
    if extra_guests < 0:
        raise BadRequest("extraGuests must not be negative")
    if extra_guests > MAX_EXTRA_GUESTS:
        raise BadRequest(f"extraGuests must be at most {MAX_EXTRA_GUESTS}")

    guest = None
    if submission.guest_id:
        guest = find_guest(session, event.id, submission.guest_id)
        if guest is None:
            raise NotFound("Guest not found")
        if guest.max_extra_guests is not None and extra_guests > guest.max_extra_guests:
            raise BadRequest(
                f"extraGuests must be at most {guest.max_extra_guests} for this guest"
            )

    songs = [_clean(s) for s in submission.favorite_songs[:2]]
    songs += [None] * (2 - len(songs))

    rsvp = Rsvp(
        event_id=event.id,
        guest_id=guest.id if guest else None,
        guest_name=guest_name,
        partner_name=_clean(submission.partner_name),
        attendance=submission.attendance,
        extra_guests=extra_guests,
        song1=songs[0],
        song2=songs[1],
        reaction=_clean(submission.reaction),
        message=_clean(submission.message),
    )
    session.add(rsvp)
    session.commit()
    session.refresh(rsvp)

    logger.info(
        f"RSVP {rsvp.id} for event {event.slug}: {rsvp.attendance} "
        f"(+{rsvp.extra_guests}, guest {rsvp.guest_id})"
    )
    return rsvp


def has_responded(session: Session, slug: str, guest_ref: str | None) -> bool:
    """Whether any RSVP of the event references the guest (by id or token)."""
    event = get_event_by_slug(session, slug)
    if not guest_ref:
        return False
    guest = find_guest(session, event.id, guest_ref)
    if guest is None:
        return False
    statement = select(Rsvp.id).where(Rsvp.event_id == event.id, Rsvp.guest_id == guest.id)
    return session.exec(statement).first() is not None


def list_rsvps(session: Session, event_id: UUID) -> list[Rsvp]:
    statement = (
        select(Rsvp)
        .where(Rsvp.event_id == event_id)
        .order_by(Rsvp.submission_time.desc())
    )
    return list(session.exec(statement).all())


HEADCOUNT = (
    func.coalesce(Rsvp.extra_guests, 0)
    + case((func.trim(func.coalesce(Rsvp.partner_name, "")) != "", 1), else_=0)
    + 1
)
"""People one RSVP brings: the guest, a partner if named, and the extras."""


def attending_count(session: Session, event_id: UUID) -> int:
    """Total people attending the event, summed over every "yes" RSVP in SQL."""
    statement = select(func.sum(HEADCOUNT)).where(
        Rsvp.event_id == event_id, Rsvp.attendance == "yes"
    )
    return session.exec(statement).one() or 0
