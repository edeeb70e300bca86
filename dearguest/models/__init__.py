from dearguest.models.event import Event
from dearguest.models.event_admin import EventAdmin
from dearguest.models.guest import Guest
from dearguest.models.lead import EarlyAccessLead
from dearguest.models.rsvp import Rsvp
from dearguest.models.user import Role, User

__all__ = ["User", "Role", "Event", "EventAdmin", "Guest", "Rsvp", "EarlyAccessLead"]
