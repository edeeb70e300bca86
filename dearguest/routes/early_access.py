"""Landing page "Get early access" form. No authentication."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dearguest.core.database import get_session
from dearguest.invites.leads import create_lead
from dearguest.schemas import Created, LeadCreate

router = APIRouter(prefix="/api/early-access", tags=["early-access"])


@router.post("", response_model=Created, status_code=201)
async def sign_up(body: LeadCreate, session: Session = Depends(get_session)):
    """Store an early-access sign-up. Name and email are required."""
    lead = create_lead(
        session,
        name=body.name,
        email=body.email,
        event_type=body.event_type,
        plan=body.plan,
        city=body.city,
    )
    return Created(id=lead.id)
