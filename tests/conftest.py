"""Shared test fixtures."""

import json

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel
from sqlmodel.pool import StaticPool

from dearguest.core.config import Settings
from dearguest.core.database import create_db_and_tables, create_db_engine, get_session
from dearguest.core.security import Principal, TokenSigner
from dearguest.invites.accounts import create_user
from dearguest.invites.guests import create_guest
from dearguest.main import create_app
from dearguest.models import Event, Guest, Role, User

PASSWORD = "correct-horse-battery"
TEST_ROUNDS = 4


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, email=user.email, role=user.role)


def bearer(signer: TokenSigner, user: User) -> dict:
    """Authorization header carrying a session token for ``user``."""
    return {"Authorization": f"Bearer {signer.sign(principal_for(user))}"}


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture(tmp_path) -> Settings:
    return Settings(
        secret_key="test-secret",
        bcrypt_rounds=TEST_ROUNDS,
        log_dir=str(tmp_path / "logs"),
        main_admin_email="",
        main_admin_password="",
    )


@pytest.fixture(name="signer")
def signer_fixture(settings: Settings) -> TokenSigner:
    return TokenSigner.from_settings(settings)


@pytest.fixture(name="client")
def client_fixture(settings: Settings, engine, session: Session):
    """Create a test client with the test database session."""
    app = create_app(settings, engine=engine)

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="main_admin")
def main_admin_fixture(session: Session) -> User:
    """The superuser."""
    return create_user(session, "admin@dearguest.test", PASSWORD, Role.MAIN_ADMIN.value, TEST_ROUNDS)


@pytest.fixture(name="owner")
def owner_fixture(session: Session) -> User:
    """An event_admin who owns ``event``."""
    return create_user(session, "couple@dearguest.test", PASSWORD, Role.EVENT_ADMIN.value, TEST_ROUNDS)


@pytest.fixture(name="outsider")
def outsider_fixture(session: Session) -> User:
    """An event_admin with no relation to ``event``."""
    return create_user(session, "planner@dearguest.test", PASSWORD, Role.EVENT_ADMIN.value, TEST_ROUNDS)


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(signer: TokenSigner, main_admin: User) -> dict:
    return bearer(signer, main_admin)


@pytest.fixture(name="owner_headers")
def owner_headers_fixture(signer: TokenSigner, owner: User) -> dict:
    return bearer(signer, owner)


@pytest.fixture(name="outsider_headers")
def outsider_headers_fixture(signer: TokenSigner, outsider: User) -> dict:
    return bearer(signer, outsider)


@pytest.fixture(name="event")
def event_fixture(session: Session, main_admin: User, owner: User) -> Event:
    """A wedding created by the main admin and owned by ``owner``."""
    event = Event(
        slug="raphael-christine",
        name="Raphael & Christine",
        config=json.dumps({"coupleNames": "Raphael & Christine", "theme": {"primary": "#aa3355"}}),
        created_by=main_admin.id,
        owner_id=owner.id,
    )
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


@pytest.fixture(name="guest")
def guest_fixture(session: Session, event: Event) -> Guest:
    """A guest with a partner who may bring up to two more people."""
    return create_guest(session, event, "Alice Martin", partner_name="Bob Martin", max_extra_guests=2)


@pytest.fixture(name="password")
def password_fixture() -> str:
    """Password shared by every user fixture."""
    return PASSWORD


@pytest.fixture(name="auth_for")
def auth_for_fixture(signer: TokenSigner):
    """Build the Authorization header for any user."""

    def build(user: User) -> dict:
        return bearer(signer, user)

    return build
