"""Authentication routes."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dearguest.core.config import Settings
from dearguest.core.database import get_session
from dearguest.core.security import TokenSigner, get_settings, get_signer
from dearguest.invites.accounts import login
from dearguest.schemas import LoginRequest, LoginResponse, UserPublic

router = APIRouter(prefix="/api/auth", tags=["auth"])


# Plain def: bcrypt is slow on purpose, so this runs in the threadpool
@router.post("/login", response_model=LoginResponse)
def login_route(
    body: LoginRequest,
    session: Session = Depends(get_session),
    signer: TokenSigner = Depends(get_signer),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange an email and password for a session token.

    The token is valid for the configured lifetime (7 days by default) and
    is sent back as ``Authorization: Bearer <token>``. Unknown email and
    wrong password both return the same 401.
    """
    token, user = login(session, signer, body.email, body.password, settings.bcrypt_rounds)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))
