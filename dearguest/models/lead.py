"""Early-access lead captured from the landing page."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class EarlyAccessLead(SQLModel, table=True):
    """A sign-up from the "Get early access" form. Append-only."""
    __tablename__ = "early_access_leads"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    email: str
    event_type: str | None = None
    plan: str | None = None
    city: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), index=True)
