"""Security helpers for navigation: guard audit events and return-target checks."""

from folio.security.audit import GuardEvent, GuardEventKind, record_guard_event, set_guard_event_sink
from folio.security.urls import is_safe_url

__all__ = [
    "GuardEvent",
    "GuardEventKind",
    "is_safe_url",
    "record_guard_event",
    "set_guard_event_sink",
]
