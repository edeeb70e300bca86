"""Early-access sign-ups from the landing page."""
import logging

from sqlmodel import Session, select

from dearguest.core.errors import BadRequest
from dearguest.models import EarlyAccessLead

logger = logging.getLogger(__name__)


def _optional(value: str | None) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def create_lead(
    session: Session,
    name: str | None,
    email: str | None,
    event_type: str | None = None,
    plan: str | None = None,
    city: str | None = None,
) -> EarlyAccessLead:
    name = _optional(name)
    email = _optional(email)
    if not name or not email:
        raise BadRequest("Name and email are required")

    lead = EarlyAccessLead(
        name=name,
        email=email,
        event_type=_optional(event_type),
        plan=_optional(plan),
        city=_optional(city),
    )
    session.add(lead)
    session.commit()
    session.refresh(lead)
    logger.info(f"Captured early-access lead {lead.id}")
    return lead


def list_leads(session: Session) -> list[EarlyAccessLead]:
    statement = select(EarlyAccessLead).order_by(EarlyAccessLead.created_at.desc())
    return list(session.exec(statement).all())
