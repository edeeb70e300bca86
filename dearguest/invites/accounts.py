"""User accounts: login, creation and credential changes."""
import logging
from functools import lru_cache
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from dearguest.core.errors import BadRequest, Conflict, InvalidCredentials, NotFound
from dearguest.core.security import (
    MAX_PASSWORD_BYTES,
    Principal,
    TokenSigner,
    hash_password,
    verify_password,
)
from dearguest.models import Role, User

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> str:
    """Hash checked when the email is unknown, at the same cost as real ones."""
    return hash_password("dearguest-timing-equalizer", rounds)


def login(
    session: Session, signer: TokenSigner, email: str, password: str, rounds: int = 10
) -> tuple[str, User]:
    """
    Check an email and password and mint a session token.

    Unknown emails and wrong passwords raise the same InvalidCredentials so
    the response never tells which one was wrong. ``rounds`` is the bcrypt
    cost users are hashed with; an unknown email is checked against a dummy
    hash of that cost so both failures take as long.
    """
    user = session.exec(select(User).where(User.email == email.strip())).first()
    if user is None:
        verify_password(password, dummy_hash(rounds))
        logger.info("Login failed")
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.info("Login failed")
        raise InvalidCredentials()

    token = signer.sign(Principal(user_id=user.id, email=user.email, role=user.role))
    logger.info(f"User {user.id} logged in")
    return token, user


def _check_password(password: str):
    if not password:
        raise BadRequest("password required")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise BadRequest(f"password must be at most {MAX_PASSWORD_BYTES} bytes")


def email_in_use(session: Session, email: str, exclude_user_id: UUID | None = None) -> bool:
    statement = select(User.id).where(User.email == email)
    if exclude_user_id is not None:
        statement = statement.where(User.id != exclude_user_id)
    return session.exec(statement).first() is not None


def new_user(session: Session, email: str, password: str, role: str, rounds: int) -> User:
    """Add a user to the session without committing.

    Used when the user is created together with other rows, e.g. an event
    owner created alongside the event.
    """
    email = email.strip()
    if not email:
        raise BadRequest("email required")
    _check_password(password)
    if role not in (Role.MAIN_ADMIN.value, Role.EVENT_ADMIN.value):
        raise BadRequest("role must be main_admin or event_admin")
    if email_in_use(session, email):
        raise Conflict("Email already exists")

    user = User(email=email, password_hash=hash_password(password, rounds), role=role)
    session.add(user)
    return user


def create_user(session: Session, email: str, password: str, role: str, rounds: int) -> User:
    user = new_user(session, email, password, role, rounds)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("Email already exists")
    session.refresh(user)
    logger.info(f"Created {user.role} user {user.id}")
    return user


def list_users(session: Session) -> list[User]:
    return list(session.exec(select(User).order_by(User.email)).all())


def get_user_or_404(session: Session, user_id: UUID | str) -> User:
    if isinstance(user_id, str):
        try:
            user_id = UUID(user_id)
        except ValueError:
            raise NotFound("User not found")
    user = session.get(User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def update_credentials(
    session: Session,
    user: User,
    email: str | None,
    new_password: str | None,
    rounds: int,
) -> User:
    """Change a user's login email and/or password."""
    email = email.strip() if email else ""
    if not email and not new_password:
        raise BadRequest("Provide email and/or newPassword to update")

    if email and email_in_use(session, email, exclude_user_id=user.id):
        raise Conflict("That email is already in use")
    if new_password:
        _check_password(new_password)

    if email:
        user.email = email
    if new_password:
        user.password_hash = hash_password(new_password, rounds)

    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("That email is already in use")
    session.refresh(user)
    logger.info(f"Updated credentials for user {user.id}")
    return user


def ensure_main_admin(session: Session, email: str, password: str, rounds: int) -> User | None:
    """Create the first main admin unless one already exists."""
    existing = session.exec(select(User).where(User.role == Role.MAIN_ADMIN.value)).first()
    if existing:
        return None
    user = create_user(session, email, password, Role.MAIN_ADMIN.value, rounds)
    logger.info(f"Bootstrapped main admin {user.email}")
    return user
