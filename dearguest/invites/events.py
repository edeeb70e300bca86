"""Event lifecycle: creation, listing, updates, slug changes and deletion."""
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, and_, delete, func, or_, select

from dearguest.core.errors import BadRequest, Conflict, NotFound, RequiresConfirmation
from dearguest.core.security import Principal
from dearguest.invites.access import EventAccess
from dearguest.invites.accounts import get_user_or_404, new_user, update_credentials
from dearguest.invites.rsvps import attending_count
from dearguest.invites.slugs import validate_slug
from dearguest.models import Event, EventAdmin, Guest, Role, Rsvp, User

logger = logging.getLogger(__name__)

EMPTY_CONFIG = "{}"


@dataclass
class EventStats:
    guest_count: int
    rsvp_count: int
    coming_count: int


def slug_taken(session: Session, slug: str, exclude_event_id: UUID | None = None) -> bool:
    statement = select(Event.id).where(Event.slug == slug)
    if exclude_event_id is not None:
        statement = statement.where(Event.id != exclude_event_id)
    return session.exec(statement).first() is not None


def count_guests(session: Session, event_id: UUID) -> int:
    return session.exec(
        select(func.count()).select_from(Guest).where(Guest.event_id == event_id)
    ).one()


def count_rsvps(session: Session, event_id: UUID) -> int:
    return session.exec(
        select(func.count()).select_from(Rsvp).where(Rsvp.event_id == event_id)
    ).one()


def event_stats(session: Session, event: Event) -> EventStats:
    return EventStats(
        guest_count=count_guests(session, event.id),
        rsvp_count=count_rsvps(session, event.id),
        coming_count=attending_count(session, event.id),
    )


def create_event(
    session: Session,
    principal: Principal,
    slug: str,
    name: str,
    config: str | None = None,
    owner_id: UUID | None = None,
    owner_email: str | None = None,
    owner_password: str | None = None,
    rounds: int = 10,
) -> tuple[Event, User | None]:
    """
    Create an event, optionally together with a new owner account.

    When ``owner_email`` and ``owner_password`` are given, a new event_admin
    user is created, made owner, and assigned to the event. Otherwise
    ``owner_id`` names an existing owner, and failing that the creator owns
    the event.

    Returns the event and the newly created owner, if any.
    """
    name = (name or "").strip()
    if not name:
        raise BadRequest("slug and name required")
    slug = validate_slug(slug or "")
    if slug_taken(session, slug):
        raise Conflict("Slug already exists")

    if bool(owner_email) != bool(owner_password):
        raise BadRequest("ownerEmail and ownerPassword required when creating event owner")

    created_owner = None
    if owner_email and owner_password:
        created_owner = new_user(
            session, owner_email, owner_password, Role.EVENT_ADMIN.value, rounds
        )
        owner = created_owner.id
    elif owner_id is not None:
        owner = get_user_or_404(session, owner_id).id
    else:
        owner = principal.user_id

    event = Event(
        slug=slug,
        name=name,
        config=config or EMPTY_CONFIG,
        created_by=principal.user_id,
        owner_id=owner,
    )
    try:
        # Flush in FK order: owner, then event, then the assignment
        session.flush()
        session.add(event)
        session.flush()
        if created_owner:
            session.add(EventAdmin(event_id=event.id, user_id=created_owner.id))
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("Slug or owner email already exists")

    session.refresh(event)
    if created_owner:
        session.refresh(created_owner)
    logger.info(f"Created event {event.slug} ({event.id}) owned by {owner}")
    return event, created_owner


def list_public_events(session: Session) -> list[Event]:
    return list(session.exec(select(Event).order_by(Event.created_at.desc())).all())


def list_visible_events(session: Session, principal: Principal) -> list[Event]:
    """
    Events the caller can administer.

    A main admin sees every event. Anyone else sees the events they own
    (an event without an owner belongs to its creator) and the events they
    are assigned to, matching what ``resolve_event_access`` lets them open.
    """
    if principal.is_main_admin:
        return list_public_events(session)

    assigned = select(EventAdmin.event_id).where(EventAdmin.user_id == principal.user_id)
    statement = (
        select(Event)
        .where(
            or_(
                Event.owner_id == principal.user_id,
                and_(Event.owner_id.is_(None), Event.created_by == principal.user_id),
                Event.id.in_(assigned),
            )
        )
        .order_by(Event.created_at.desc())
    )
    return list(session.exec(statement).all())


def get_owner(session: Session, event: Event) -> User | None:
    owner_id = event.effective_owner_id
    return session.get(User, owner_id) if owner_id else None


def _delete_guests_and_rsvps(session: Session, event_id: UUID):
    session.exec(delete(Rsvp).where(Rsvp.event_id == event_id))
    session.exec(delete(Guest).where(Guest.event_id == event_id))


def update_event(
    session: Session,
    access: EventAccess,
    name: str | None = None,
    config: str | None = None,
    slug: str | None = None,
    confirm_remove_guests_and_rsvps: bool = False,
) -> Event:
    """
    Apply a partial update to an event.

    Every permission and validation check runs before anything is written,
    so a rejected request changes nothing.

    Changing the slug of an event that has guests or RSVPs deletes all of
    them, because their links embed the old slug. Unless the caller sets
    ``confirm_remove_guests_and_rsvps``, that change is rejected with
    RequiresConfirmation carrying the current counts.

    Raises:
        Forbidden: a name or slug change by someone other than the system admin.
        InvalidSlug: the new slug normalizes to fewer than 2 characters.
        Conflict: another event already uses the new slug.
        RequiresConfirmation: see above.
    """
    event = access.event

    if name is not None:
        access.require_system_admin("change the event name")
        name = name.strip()
        if not name:
            raise BadRequest("name must not be empty")
    if slug is not None:
        access.require_system_admin("change the event URL")
        slug = validate_slug(slug)

    slug_changes = slug is not None and slug != event.slug
    removed = (0, 0)
    if slug_changes:
        if slug_taken(session, slug, exclude_event_id=event.id):
            raise Conflict("That URL is already used by another event")
        guest_count = count_guests(session, event.id)
        rsvp_count = count_rsvps(session, event.id)
        if (guest_count or rsvp_count) and not confirm_remove_guests_and_rsvps:
            raise RequiresConfirmation(guest_count=guest_count, rsvp_count=rsvp_count)
        removed = (guest_count, rsvp_count)

    if config is not None:
        event.config = config
    if name is not None:
        event.name = name
    if slug_changes:
        if any(removed):
            _delete_guests_and_rsvps(session, event.id)
        old_slug = event.slug
        event.slug = slug

    session.add(event)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("That URL is already used by another event")
    session.refresh(event)

    if slug_changes:
        logger.info(
            f"Changed slug of event {event.id} from {old_slug} to {event.slug}, "
            f"removed {removed[0]} guests and {removed[1]} RSVPs"
        )
    return event


def delete_event(session: Session, access: EventAccess):
    """Delete an event with its guests, RSVPs and admin assignments."""
    access.require_system_admin("delete events")
    event = access.event
    event_id, slug = event.id, event.slug

    _delete_guests_and_rsvps(session, event_id)
    session.exec(delete(EventAdmin).where(EventAdmin.event_id == event_id))
    session.exec(delete(Event).where(Event.id == event_id))
    session.commit()
    logger.info(f"Deleted event {slug} ({event_id})")


def update_owner_credentials(
    session: Session,
    access: EventAccess,
    email: str | None,
    new_password: str | None,
    rounds: int,
) -> User:
    access.require_system_admin("change the event owner login")
    owner = get_owner(session, access.event)
    if owner is None:
        raise BadRequest("Event has no owner")
    return update_credentials(session, owner, email, new_password, rounds)


def assign_admin(session: Session, access: EventAccess, user_id: UUID | str) -> EventAdmin:
    access.require_system_admin("assign event admins")
    user = get_user_or_404(session, user_id)
    event = access.event

    if session.get(EventAdmin, (event.id, user.id)):
        raise Conflict("Already assigned")
    assignment = EventAdmin(event_id=event.id, user_id=user.id)
    session.add(assignment)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("Already assigned")
    session.refresh(assignment)
    logger.info(f"Assigned user {user.id} to event {event.slug}")
    return assignment


def unassign_admin(session: Session, access: EventAccess, user_id: UUID | str):
    access.require_system_admin("remove event admins")
    event = access.event
    try:
        user_uuid = UUID(str(user_id))
    except ValueError:
        raise NotFound("Assignment not found")

    assignment = session.get(EventAdmin, (event.id, user_uuid))
    if not assignment:
        raise NotFound("Assignment not found")
    session.delete(assignment)
    session.commit()
    logger.info(f"Removed user {user_uuid} from event {event.slug}")


def list_assigned_admins(session: Session, access: EventAccess) -> list[User]:
    access.require_system_admin("view event admins")
    statement = (
        select(User)
        .join(EventAdmin, EventAdmin.user_id == User.id)
        .where(EventAdmin.event_id == access.event.id)
        .order_by(User.email)
    )
    return list(session.exec(statement).all())
