"""Navigation guard — session check before a navigation commits.

Every pending navigation is checked once. Routes whose matched chain
carries ``requires_auth``, and every path under the admin prefix, need an
active session from the backend. Without one the navigation is sent to
the login view, carrying the requested path so the login view can send
the user back afterwards.

Usage::

    guard = NavigationGuard(provider, config)
    decision = await guard.check(resolved)
    if isinstance(decision, RedirectToLogin):
        await navigator.push(guard.login_target(decision))
"""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

from folio.config import NavigationConfig
from folio.routing import NamedTarget, QueryParams, ResolvedNavigation
from folio.security.audit import GuardEventKind, record_guard_event
from folio.security.urls import is_safe_url

logger = logging.getLogger("folio.guard")

# ---------------------------------------------------------------------------
# Session provider protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class SessionProvider(Protocol):
    """The hosted backend's session lookup.

    Returns an opaque session object, or ``None`` when nobody is signed
    in. The guard only observes the result; it never signs in or out.
    """

    async def get_current_session(self) -> object | None: ...


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Proceed:
    """Let the navigation commit."""


@dataclass(frozen=True, slots=True)
class RedirectToLogin:
    """Send the navigation to the login view.

    ``return_to`` is the originally requested full path, or ``None`` when
    no return target is carried.
    """

    return_to: str | None = None


GuardDecision: TypeAlias = Proceed | RedirectToLogin

PROCEED = Proceed()


# ---------------------------------------------------------------------------
# Guard
# ---------------------------------------------------------------------------


def under_prefix(path: str, prefix: str) -> bool:
    """Whether *path* is *prefix* itself or lies below it.

    Segment-aware: ``/admin/issues`` is under ``/admin``, ``/administer``
    is not.
    """
    prefix = prefix.rstrip("/")
    if not prefix:
        return True
    return path == prefix or path.startswith(f"{prefix}/")


class NavigationGuard:
    """Session gate for pending navigations.

    Outcomes per navigation:

    - ``Proceed`` — no session needed, or a session exists.
    - ``RedirectToLogin(full_path)`` — session needed and missing.
    - ``RedirectToLogin(None)`` — as above, but the requested path is not
      a usable return target (or return targets are disabled).

    A failing session lookup counts as "no session".
    """

    __slots__ = ("_config", "_provider")

    def __init__(self, provider: SessionProvider, config: NavigationConfig | None = None) -> None:
        self._provider = provider
        self._config = config or NavigationConfig()

    @property
    def config(self) -> NavigationConfig:
        return self._config

    def requires_auth(self, to: ResolvedNavigation) -> bool:
        """Metadata anywhere in the chain, or a path under the admin prefix."""
        return to.meta.requires_auth or under_prefix(to.path, self._config.admin_prefix)

    async def check(self, to: ResolvedNavigation) -> GuardDecision:
        """Decide whether *to* may commit."""
        if not self.requires_auth(to):
            return PROCEED

        session, error = await self._lookup_session(to)
        if session is not None:
            return PROCEED

        return_to = self._return_target_for(to)
        if error is None:
            logger.info("No session for %s, redirecting to login", to.full_path)
            record_guard_event(GuardEventKind.SESSION_MISSING, to.full_path, return_to=return_to)
        else:
            record_guard_event(
                GuardEventKind.SESSION_ERROR, to.full_path, return_to=return_to, error=error
            )
        return RedirectToLogin(return_to=return_to)

    async def _lookup_session(self, to: ResolvedNavigation) -> tuple[object | None, str | None]:
        """Return (session, error type name)."""
        try:
            return await self._provider.get_current_session(), None
        except Exception as exc:
            # Fail closed: a lookup error counts as no session
            logger.warning("Session lookup failed for %s: %s", to.full_path, exc)
            return None, type(exc).__name__

    def _return_target_for(self, to: ResolvedNavigation) -> str | None:
        if self._config.redirect_param is None:
            return None
        if not is_safe_url(to.full_path):
            record_guard_event(GuardEventKind.RETURN_REJECTED, to.full_path)
            return None
        return to.full_path

    def login_target(self, decision: RedirectToLogin) -> NamedTarget:
        """Build the login navigation for a redirect decision."""
        query: dict[str, str] = {}
        if decision.return_to is not None and self._config.redirect_param is not None:
            query[self._config.redirect_param] = decision.return_to
        return NamedTarget(name=self._config.login_route, query=query)

    def return_target(self, query: QueryParams) -> str:
        """Where the login view should go after a successful sign-in.

        Falls back to the default path when the query carries no usable
        target.
        """
        param = self._config.redirect_param
        target = query.get(param) if param is not None else None
        if target is None:
            return self._config.default_path
        if not is_safe_url(target):
            logger.warning("Ignoring unsafe return target %r", target)
            record_guard_event(GuardEventKind.RETURN_REJECTED, target)
            return self._config.default_path
        return target
