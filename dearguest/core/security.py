"""Password hashing and signed session tokens.

Passwords are hashed with bcrypt at the configured work factor. Session
tokens are stateless: an itsdangerous timed signature over the claims
``{userId, email, role}``. Verification failures of any kind (expired,
tampered, malformed) surface as ``InvalidToken`` and are reported to the
client as a plain 401.
"""
from dataclasses import dataclass
from uuid import UUID

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadData, URLSafeTimedSerializer

from dearguest.core.config import Settings
from dearguest.core.errors import Unauthorized
from dearguest.models.user import Role

TOKEN_SALT = "dearguest-session-v1"

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


class InvalidToken(Exception):
    """The token is expired, tampered with, or not a session token at all."""


@dataclass(frozen=True)
class Principal:
    """The identity carried by a verified session token."""

    user_id: UUID
    email: str
    role: str

    @property
    def is_main_admin(self) -> bool:
        return self.role == Role.MAIN_ADMIN.value

    def claims(self) -> dict:
        return {"userId": str(self.user_id), "email": self.email, "role": self.role}


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("ascii"))


class TokenSigner:
    """Mint and verify session tokens with a fixed lifetime."""

    def __init__(self, secret_key: str, max_age_seconds: int):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self.max_age_seconds = max_age_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        return cls(settings.secret_key, settings.token_max_age_seconds)

    def sign(self, principal: Principal) -> str:
        return self._serializer.dumps(principal.claims())

    def verify(self, token: str) -> Principal:
        try:
            claims = self._serializer.loads(token, max_age=self.max_age_seconds)
        except BadData as e:
            raise InvalidToken(str(e)) from e

        if not isinstance(claims, dict):
            raise InvalidToken("Claims are not an object")
        try:
            user_id = UUID(claims["userId"])
            email = claims["email"]
            role = Role(claims["role"]).value
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidToken("Malformed claims") from e
        return Principal(user_id=user_id, email=email, role=role)


bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_signer(request: Request) -> TokenSigner:
    return request.app.state.signer


def get_current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    signer: TokenSigner = Depends(get_signer),
) -> Principal:
    """Dependency resolving the bearer token to a Principal, or 401."""
    if credentials is None:
        raise Unauthorized()
    try:
        return signer.verify(credentials.credentials)
    except InvalidToken:
        raise Unauthorized()
