"""Guard audit trail.

Every time the navigation guard turns a navigation away, or refuses a
return target, it records a ``GuardEvent``. Nothing is delivered until
an application installs a sink, typically one that forwards to the
backend's audit log::

    set_guard_event_sink(lambda event: backend.audit(event.kind.value, event.path))
"""

import enum
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import TypeAlias


class GuardEventKind(enum.Enum):
    """What the guard observed."""

    SESSION_MISSING = "guard.session.missing"
    SESSION_ERROR = "guard.session.error"
    RETURN_REJECTED = "guard.return.rejected"


@dataclass(frozen=True, slots=True)
class GuardEvent:
    """One guard outcome.

    Attributes:
        kind: The observation.
        path: Full path of the navigation being checked, or the rejected
            return target for ``RETURN_REJECTED``.
        return_to: Return target carried to the login view, if any.
        error: Exception type name when the session lookup failed.
    """

    kind: GuardEventKind
    path: str
    return_to: str | None = None
    error: str | None = None
    timestamp: float = field(default_factory=time)


GuardEventSink: TypeAlias = Callable[[GuardEvent], None]


_sink_lock = threading.Lock()
_sink: GuardEventSink | None = None


def set_guard_event_sink(sink: GuardEventSink | None) -> None:
    """Install the process-wide sink for guard events; ``None`` removes it."""
    global _sink
    with _sink_lock:
        _sink = sink


def record_guard_event(
    kind: GuardEventKind,
    path: str,
    *,
    return_to: str | None = None,
    error: str | None = None,
) -> None:
    with _sink_lock:
        sink = _sink
    if sink is None:
        return
    sink(GuardEvent(kind=kind, path=path, return_to=return_to, error=error))
