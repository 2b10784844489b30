"""Folio exception hierarchy.

Shared across the route table, guard, navigator, and CLI so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class FolioError(Exception):
    """Base for all folio-specific errors."""


class ConfigurationError(FolioError):
    """Raised when route records or navigation configuration are invalid.

    Typically raised while building the route table at startup.
    """


class NavigationError(FolioError):
    """Raised when a navigation cannot be carried out at all.

    Redirect loops and navigating on a navigator that was never started
    end up here. Guard denials and superseded navigations are not errors;
    they are reported on the ``NavigationResult``.
    """


@dataclass(frozen=True, slots=True)
class NotFound(FolioError):  # noqa: N818 — conventional name in routers
    """No route record matches the requested path."""

    path: str

    def __str__(self) -> str:
        return f"No route matches {self.path!r}"
