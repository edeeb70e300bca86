"""Error taxonomy and the handlers that render it as JSON.

Services raise these exceptions; the handlers registered by
``register_exception_handlers`` turn each one into a response carrying a
short machine-readable ``error`` reason and a human ``detail`` message.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DearGuestError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    reason = "server_error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def body(self) -> dict:
        return {"error": self.reason, "detail": self.message}


class Unauthorized(DearGuestError):
    status_code = 401
    reason = "unauthorized"
    default_message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    """Login failed. Raised for unknown emails and wrong passwords alike."""

    reason = "invalid_credentials"
    default_message = "Invalid credentials"


class Forbidden(DearGuestError):
    status_code = 403
    reason = "forbidden"
    default_message = "Forbidden"


class NotFound(DearGuestError):
    status_code = 404
    reason = "not_found"
    default_message = "Not found"


class BadRequest(DearGuestError):
    status_code = 400
    reason = "bad_request"
    default_message = "Bad request"


class InvalidSlug(BadRequest):
    reason = "invalid_slug"
    default_message = (
        "Slug must be at least 2 characters and only letters, numbers, and hyphens"
    )


class Conflict(DearGuestError):
    status_code = 409
    reason = "conflict"
    default_message = "Conflict"


class RequiresConfirmation(DearGuestError):
    """A slug change would delete guests and RSVPs and was not confirmed.

    Attributes:
        guest_count: Guests that the confirmed change will delete.
        rsvp_count: RSVPs that the confirmed change will delete.
    """

    status_code = 400
    reason = "requires_confirmation"
    default_message = "Event has guests or RSVPs"

    def __init__(self, guest_count: int, rsvp_count: int):
        super().__init__()
        self.guest_count = guest_count
        self.rsvp_count = rsvp_count

    def body(self) -> dict:
        return {
            **super().body(),
            "requireConfirm": True,
            "guestCount": self.guest_count,
            "rsvpCount": self.rsvp_count,
        }


async def dearguest_error_handler(request: Request, exc: DearGuestError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(exc.body(), status_code=exc.status_code, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.append({"field": ".".join(location), "message": error.get("msg", "")})
    missing = ", ".join(f["field"] for f in fields if f["field"]) or "request"
    return JSONResponse(
        {"error": BadRequest.reason, "detail": f"Invalid or missing: {missing}", "fields": fields},
        status_code=400,
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error while processing {request.method} {request.url.path}")
    return JSONResponse(DearGuestError().body(), status_code=500)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(DearGuestError, dearguest_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
