"""Decide what an authenticated user may do with an event.

Every privileged route that targets an event goes through
``resolve_event_access``. It looks the event up first, so a missing event is
always reported as NotFound before any permission is checked, then
classifies the caller into one access level:

    SYSTEM_ADMIN    main_admin; every event, every operation
    EVENT_OWNER     owner of this event (or its creator when no owner is set)
    ASSIGNED_ADMIN  listed in event_admins for this event
    NONE            anything else; rejected with Forbidden

Owners and assigned admins may edit the invitation content and manage
guests and RSVPs. Renaming, changing the slug, deleting the event and
managing assignments stay with the system admin.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from sqlmodel import Session, or_, select

from dearguest.core.errors import Forbidden, NotFound
from dearguest.core.security import Principal
from dearguest.models import Event, EventAdmin

logger = logging.getLogger(__name__)


class AccessLevel(str, Enum):
    SYSTEM_ADMIN = "main_admin"
    EVENT_OWNER = "event_owner"
    ASSIGNED_ADMIN = "assigned_admin"
    NONE = "none"


@dataclass(frozen=True)
class EventAccess:
    """A resolved event together with the caller's access level for it."""

    event: Event
    level: AccessLevel
    principal: Principal

    @property
    def is_system_admin(self) -> bool:
        return self.level is AccessLevel.SYSTEM_ADMIN

    def require_system_admin(self, action: str):
        if not self.is_system_admin:
            raise Forbidden(f"Only the system admin can {action}")


def parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


def find_event(session: Session, slug_or_id: str) -> Event | None:
    """Look an event up by id or slug in a single query."""
    event_id = parse_uuid(slug_or_id)
    condition = Event.slug == slug_or_id
    if event_id is not None:
        condition = or_(Event.id == event_id, condition)
    return session.exec(select(Event).where(condition)).first()


def get_event_or_404(session: Session, slug_or_id: str) -> Event:
    event = find_event(session, slug_or_id)
    if not event:
        raise NotFound("Event not found")
    return event


def get_event_by_slug(session: Session, slug: str) -> Event:
    """Public lookup used by the guest-facing site. Slug only, never id."""
    event = session.exec(select(Event).where(Event.slug == slug)).first()
    if not event:
        raise NotFound("Event not found")
    return event


def is_assigned(session: Session, event_id: UUID, user_id: UUID) -> bool:
    assignment = session.get(EventAdmin, (event_id, user_id))
    return assignment is not None


def classify_access(principal: Principal, event: Event, assigned: bool) -> AccessLevel:
    """Return the first matching access level, most privileged first."""
    if principal.is_main_admin:
        return AccessLevel.SYSTEM_ADMIN
    if event.effective_owner_id == principal.user_id:
        return AccessLevel.EVENT_OWNER
    if assigned:
        return AccessLevel.ASSIGNED_ADMIN
    return AccessLevel.NONE


def resolve_event_access(
    session: Session, principal: Principal, slug_or_id: str
) -> EventAccess:
    """
    Resolve the target event and the caller's access level for it.

    Raises:
        NotFound: no event has this id or slug.
        Forbidden: the event exists but the caller has no access to it.
    """
    event = get_event_or_404(session, slug_or_id)

    assigned = False
    if not principal.is_main_admin and event.effective_owner_id != principal.user_id:
        assigned = is_assigned(session, event.id, principal.user_id)

    level = classify_access(principal, event, assigned)
    if level is AccessLevel.NONE:
        logger.info(f"User {principal.user_id} denied access to event {event.slug}")
        raise Forbidden("Forbidden: not admin for this event")
    return EventAccess(event=event, level=level, principal=principal)


def require_main_admin(principal: Principal):
    if not principal.is_main_admin:
        raise Forbidden("Forbidden: main admin only")
