"""Tests for the guest-facing API."""

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from dearguest.models import Event, Guest, Rsvp


class TestPublicEvents:
    """Tests for the public event lookups."""

    def test_list_events(self, client: TestClient, event: Event):
        """Test listing events without authentication."""
        response = client.get("/api/events")
        assert response.status_code == 200
        assert [e["slug"] for e in response.json()] == [event.slug]

    def test_get_event(self, client: TestClient, event: Event):
        """Test that the config comes back as an object."""
        response = client.get(f"/api/events/{event.slug}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Raphael & Christine"
        assert data["config"]["theme"] == {"primary": "#aa3355"}

    def test_get_event_by_id_is_not_public(self, client: TestClient, event: Event):
        """Test that the public lookup only accepts slugs."""
        response = client.get(f"/api/events/{event.id}")
        assert response.status_code == 404

    def test_unknown_event(self, client: TestClient):
        """Test 404 for an unknown slug."""
        response = client.get("/api/events/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "detail": "Event not found"}


class TestGuestLink:
    """Tests for dedicated invite links."""

    def test_resolve_token(self, client: TestClient, event: Event, guest: Guest):
        """Test resolving a token to its guest."""
        response = client.get(f"/api/events/{event.slug}/guest/{guest.token}")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Alice Martin"
        assert data["partnerName"] == "Bob Martin"
        assert data["maxExtraGuests"] == 2

    def test_unknown_token(self, client: TestClient, event: Event, guest: Guest):
        """Test 404 for a token that does not exist."""
        response = client.get(f"/api/events/{event.slug}/guest/not-a-token")
        assert response.status_code == 404

    def test_token_of_other_event(
        self, client: TestClient, session: Session, event: Event, guest: Guest
    ):
        """Test that a token only works under its own event."""
        session.add(Event(slug="other", name="Other", created_by=event.created_by))
        session.commit()

        response = client.get(f"/api/events/other/guest/{guest.token}")
        assert response.status_code == 404

    def test_opened_is_idempotent(
        self, client: TestClient, session: Session, event: Event, guest: Guest
    ):
        """Test that only the first open is recorded."""
        path = f"/api/events/{event.slug}/guest/{guest.token}/opened"

        first = client.post(path)
        assert first.status_code == 200
        assert first.json() == {"ok": True}
        session.refresh(guest)
        opened_at = guest.first_opened_at
        assert opened_at is not None

        second = client.post(path)
        assert second.status_code == 200
        session.refresh(guest)
        assert guest.first_opened_at == opened_at

    def test_opened_unknown_token(self, client: TestClient, event: Event):
        """Test that marking an unknown token is a 404."""
        response = client.post(f"/api/events/{event.slug}/guest/nope/opened")
        assert response.status_code == 404


class TestRsvp:
    """Tests for RSVP submission and status."""

    def test_guest_journey(
        self, client: TestClient, owner_headers: dict, event: Event
    ):
        """Test a guest from invite link to the organizer's headcount."""
        created = client.post(
            f"/api/admin/events/{event.slug}/guests",
            headers=owner_headers,
            json={"name": "Alice", "partnerName": "Bob", "maxExtraGuests": 2},
        ).json()
        token = created["token"]

        guest = client.get(f"/api/events/{event.slug}/guest/{token}").json()
        client.post(f"/api/events/{event.slug}/guest/{token}/opened")

        status = client.get(f"/api/events/{event.slug}/rsvp-status", params={"guestId": guest["id"]})
        assert status.json() == {"found": False}

        response = client.post(
            f"/api/events/{event.slug}/rsvp",
            json={
                "guestId": guest["id"],
                "guestName": "Alice",
                "partnerName": "Bob",
                "attendance": "yes",
                "extraGuests": 2,
                "favoriteSongs": ["September", "Dancing Queen", "Third song"],
                "reaction": "🎉",
                "message": "See you there!",
            },
        )
        assert response.status_code == 201
        assert response.json()["success"] is True

        status = client.get(f"/api/events/{event.slug}/rsvp-status", params={"guestId": token})
        assert status.json() == {"found": True}

        detail = client.get(f"/api/admin/events/{event.slug}", headers=owner_headers).json()
        assert detail["comingCount"] == 4
        assert detail["rsvpCount"] == 1

        guests = client.get(f"/api/admin/events/{event.slug}/guests", headers=owner_headers).json()
        assert guests[0]["firstOpenedAt"] is not None
        assert guests[0]["hasRsvp"] is True

        rsvps = client.get(f"/api/admin/events/{event.slug}/rsvps", headers=owner_headers).json()
        assert rsvps[0]["song1"] == "September"
        assert rsvps[0]["song2"] == "Dancing Queen"

    def test_shared_link_rsvp(self, client: TestClient, session: Session, event: Event):
        """Test an RSVP through the shared link, without a guest."""
        response = client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestName": "Walk-in", "attendance": "no"},
        )
        assert response.status_code == 201

        rsvp = session.exec(select(Rsvp).where(Rsvp.event_id == event.id)).one()
        assert rsvp.guest_id is None
        assert rsvp.extra_guests == 0

    def test_token_as_guest_id(
        self, client: TestClient, session: Session, event: Event, guest: Guest
    ):
        """Test that the stored guest_id is the guest's id even when a token is sent."""
        client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestId": guest.token, "guestName": guest.name, "attendance": "yes"},
        )

        rsvp = session.exec(select(Rsvp).where(Rsvp.event_id == event.id)).one()
        assert rsvp.guest_id == guest.id

    def test_missing_fields(self, client: TestClient, event: Event):
        """Test that guestName and attendance are required."""
        response = client.post(f"/api/events/{event.slug}/rsvp", json={"guestName": "  ", "attendance": "yes"})
        assert response.status_code == 400

        response = client.post(f"/api/events/{event.slug}/rsvp", json={"guestName": "Alice"})
        assert response.status_code == 400

    def test_invalid_attendance(self, client: TestClient, event: Event):
        """Test that attendance must be yes or no."""
        response = client.post(
            f"/api/events/{event.slug}/rsvp", json={"guestName": "Alice", "attendance": "maybe"}
        )
        assert response.status_code == 400

    def test_extra_guests_cap(
        self, client: TestClient, session: Session, event: Event, guest: Guest
    ):
        """Test that a guest cannot bring more people than allowed."""
        response = client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestId": str(guest.id), "guestName": guest.name, "attendance": "yes", "extraGuests": 3},
        )
        assert response.status_code == 400
        assert session.exec(select(Rsvp)).all() == []

    def test_negative_extra_guests(self, client: TestClient, event: Event):
        """Test that negative extra guests are rejected."""
        response = client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestName": "Alice", "attendance": "yes", "extraGuests": -1},
        )
        assert response.status_code == 400

    def test_extra_guests_too_large(self, client: TestClient, session: Session, event: Event):
        """Test that a huge number of extra guests is a 400, not a server error."""
        response = client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestName": "A", "attendance": "yes", "extraGuests": 10**20},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "bad_request"
        assert session.exec(select(Rsvp)).all() == []

    def test_songs_keep_their_position(self, client: TestClient, session: Session, event: Event):
        """Test that a blank first song leaves song1 empty instead of shifting song2."""
        client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestName": "Alice", "attendance": "yes", "favoriteSongs": ["", "Dancing Queen"]},
        )

        rsvp = session.exec(select(Rsvp).where(Rsvp.event_id == event.id)).one()
        assert rsvp.song1 is None
        assert rsvp.song2 == "Dancing Queen"

    def test_guest_of_other_event(
        self, client: TestClient, session: Session, event: Event, guest: Guest
    ):
        """Test that an RSVP cannot reference another event's guest."""
        session.add(Event(slug="other", name="Other", created_by=event.created_by))
        session.commit()

        response = client.post(
            "/api/events/other/rsvp",
            json={"guestId": str(guest.id), "guestName": guest.name, "attendance": "yes"},
        )
        assert response.status_code == 404

    def test_unknown_event(self, client: TestClient):
        """Test that RSVPs for an unknown event are a 404."""
        response = client.post("/api/events/nope/rsvp", json={"guestName": "A", "attendance": "yes"})
        assert response.status_code == 404

    def test_duplicates_are_counted(
        self, client: TestClient, owner_headers: dict, event: Event, guest: Guest
    ):
        """Test that a repeated submission adds a row and counts again."""
        body = {"guestId": str(guest.id), "guestName": guest.name, "attendance": "yes"}
        client.post(f"/api/events/{event.slug}/rsvp", json=body)
        client.post(f"/api/events/{event.slug}/rsvp", json=body)

        detail = client.get(f"/api/admin/events/{event.slug}", headers=owner_headers).json()
        assert detail["rsvpCount"] == 2
        assert detail["comingCount"] == 2

    def test_declined_not_counted(
        self, client: TestClient, owner_headers: dict, event: Event
    ):
        """Test that a "no" brings nobody, whatever else it says."""
        client.post(
            f"/api/events/{event.slug}/rsvp",
            json={"guestName": "Carol", "partnerName": "Dan", "attendance": "no", "extraGuests": 3},
        )

        detail = client.get(f"/api/admin/events/{event.slug}", headers=owner_headers).json()
        assert detail["comingCount"] == 0

    def test_status_without_guest(self, client: TestClient, event: Event):
        """Test that the status check without a guest is simply not found."""
        response = client.get(f"/api/events/{event.slug}/rsvp-status")
        assert response.status_code == 200
        assert response.json() == {"found": False}

    def test_status_unknown_event(self, client: TestClient):
        """Test that the status check for an unknown event is a 404."""
        response = client.get("/api/events/nope/rsvp-status", params={"guestId": "x"})
        assert response.status_code == 404


class TestEarlyAccess:
    """Tests for the early-access sign-up form."""

    def test_sign_up(self, client: TestClient, session: Session):
        """Test storing a sign-up."""
        response = client.post(
            "/api/early-access",
            json={"name": "Dana", "email": "dana@example.com", "eventType": "wedding", "city": "Lyon"},
        )
        assert response.status_code == 201
        assert response.json()["success"] is True

    def test_email_required(self, client: TestClient):
        """Test that name and email are required."""
        response = client.post("/api/early-access", json={"name": "Dana"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Name and email are required"
