"""Invite link previews.

Chat apps and social networks fetch a shared invite link without running
JavaScript, so the page shell for ``/e/<slug>`` carries the event's share
title, description and image as meta tags before the frontend takes over.
"""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from dearguest.core.config import Settings
from dearguest.core.database import get_session
from dearguest.core.errors import NotFound
from dearguest.core.security import get_settings
from dearguest.invites.access import get_event_by_slug
from dearguest.models import Event
from dearguest.schemas.common import decode_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/e", tags=["invites"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _text(mapping: dict, key: str) -> str | None:
    value = mapping.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def absolute_url(url: str, origin: str) -> str:
    """Prefix a relative image path with the request origin."""
    if url.lower().startswith(("http://", "https://")):
        return url
    return f"{origin.rstrip('/')}/{url.lstrip('/')}"


def share_meta(event: Event | None, settings: Settings, origin: str) -> dict:
    """
    Title, description and image for an invite link preview.

    Values set in ``config.shareMeta`` win. Otherwise the title is built from
    ``config.coupleNames`` or the event name, and an unknown event gets the
    site defaults.
    """
    if event is None:
        return {
            "title": settings.site_title,
            "description": settings.site_description,
            "image": None,
        }

    config = decode_config(event.config)
    if not isinstance(config, dict):
        config = {}
    meta = config.get("shareMeta")
    if not isinstance(meta, dict):
        meta = {}

    title = _text(meta, "title")
    if not title:
        display_name = _text(config, "coupleNames") or event.name
        title = f"{display_name} | {settings.site_name}" if display_name else settings.site_title

    image = _text(meta, "image")
    return {
        "title": title,
        "description": _text(meta, "description") or settings.share_description,
        "image": absolute_url(image, origin) if image else None,
    }


def _render(request: Request, slug: str, session: Session, settings: Settings) -> HTMLResponse:
    try:
        event = get_event_by_slug(session, slug)
    except NotFound:
        logger.debug(f"Preview requested for unknown event {slug}")
        event = None

    return templates.TemplateResponse(
        request,
        "invite.html",
        {
            "meta": share_meta(event, settings, str(request.base_url)),
            "site_name": settings.site_name,
            "page_url": str(request.url),
            "frontend_script": settings.frontend_script,
        },
    )


@router.get("/{slug}", response_class=HTMLResponse)
async def event_page(
    request: Request,
    slug: str,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Page shell for the shared event link."""
    return _render(request, slug, session, settings)


@router.get("/{slug}/invite/{token}", response_class=HTMLResponse)
async def invite_page(
    request: Request,
    slug: str,
    token: str,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """
    Page shell for a dedicated guest link.

    The preview is the event's; the token is resolved by the frontend
    through the public API.
    """
    return _render(request, slug, session, settings)
