"""Tests for database models."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from dearguest.models import EarlyAccessLead, Event, EventAdmin, Guest, Rsvp, User


class TestUserModel:
    """Tests for the User model."""

    def test_email_unique(self, session: Session, owner: User):
        """Test that two users cannot share an email."""
        session.add(User(email=owner.email, password_hash="x"))

        with pytest.raises(IntegrityError):
            session.commit()

    def test_default_role(self, session: Session):
        """Test that new users are event admins unless stated otherwise."""
        user = User(email="new@dearguest.test", password_hash="x")
        session.add(user)
        session.commit()

        assert user.role == "event_admin"
        assert user.is_main_admin is False

    def test_password_not_stored_in_clear(self, owner: User, password: str):
        """Test that the stored hash is not the password."""
        assert owner.password_hash != password
        assert owner.password_hash.startswith("$2")


class TestEventModel:
    """Tests for the Event model."""

    def test_slug_unique(self, session: Session, event: Event, main_admin: User):
        """Test that slug must be unique."""
        session.add(Event(slug=event.slug, name="Another", created_by=main_admin.id))

        with pytest.raises(IntegrityError):
            session.commit()

    def test_default_config(self, session: Session, main_admin: User):
        """Test that a new event starts with an empty config object."""
        event = Event(slug="empty", name="Empty", created_by=main_admin.id)
        session.add(event)
        session.commit()

        retrieved = session.exec(select(Event).where(Event.slug == "empty")).first()
        assert retrieved.config == "{}"
        assert retrieved.owner_id is None

    def test_effective_owner_falls_back_to_creator(self, session: Session, main_admin: User):
        """Test that the creator is treated as owner when no owner is set."""
        event = Event(slug="mine", name="Mine", created_by=main_admin.id)
        session.add(event)
        session.commit()

        assert event.effective_owner_id == main_admin.id

    def test_effective_owner(self, event: Event, owner: User):
        """Test that an explicit owner wins over the creator."""
        assert event.effective_owner_id == owner.id


class TestGuestModel:
    """Tests for the Guest model."""

    def test_guest_event_relationship(self, session: Session, event: Event, guest: Guest):
        """Test that guests are linked to their event."""
        session.refresh(event)
        assert [g.name for g in event.guests] == ["Alice Martin"]
        assert guest.event.slug == event.slug

    def test_token_unique(self, session: Session, event: Event, guest: Guest):
        """Test that two guests cannot share a token."""
        session.add(Guest(event_id=event.id, token=guest.token, name="Copy"))

        with pytest.raises(IntegrityError):
            session.commit()

    def test_not_opened_initially(self, guest: Guest):
        """Test that a new guest has not opened their link."""
        assert guest.first_opened_at is None


class TestRsvpModel:
    """Tests for the Rsvp model."""

    def test_defaults(self, session: Session, event: Event):
        """Test RSVP defaults."""
        rsvp = Rsvp(event_id=event.id, guest_name="Walk-in", attendance="no")
        session.add(rsvp)
        session.commit()

        retrieved = session.get(Rsvp, rsvp.id)
        assert retrieved.extra_guests == 0
        assert retrieved.guest_id is None
        assert retrieved.submission_time is not None


class TestEventAdminModel:
    """Tests for the EventAdmin assignment table."""

    def test_assignment_unique(self, session: Session, event: Event, outsider: User):
        """Test that a user is assigned to an event at most once."""
        event_id, user_id = event.id, outsider.id
        session.add(EventAdmin(event_id=event_id, user_id=user_id))
        session.commit()
        session.expunge_all()

        session.add(EventAdmin(event_id=event_id, user_id=user_id))
        with pytest.raises(IntegrityError):
            session.commit()


class TestEarlyAccessLeadModel:
    """Tests for the EarlyAccessLead model."""

    def test_optional_fields(self, session: Session):
        """Test that only name and email are needed."""
        lead = EarlyAccessLead(name="Dana", email="dana@example.com")
        session.add(lead)
        session.commit()

        retrieved = session.get(EarlyAccessLead, lead.id)
        assert retrieved.plan is None
        assert retrieved.created_at is not None
