"""Navigator — drives a navigation from request to settled scroll.

One navigator per page session, constructed explicitly and handed to
whatever needs it::

    navigator = Navigator(build_route_table(), NavigationGuard(backend), ScrollController(window))
    async with navigator:
        await navigator.start("/articles/42")
        await navigator.push("/authors", intent=ScrollToSelector("#article-42"))
        await navigator.back()

Pipeline for every navigation: resolve -> guard -> follow login and
record redirects (each hop guarded again) -> commit to history ->
notify listeners -> schedule scroll restoration.

The guard's session lookup is the only await before commit. When a
newer navigation starts while an older one is waiting on it, the older
one is reported as cancelled and its late guard result is discarded.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from types import TracebackType
from typing import TypeAlias

import anyio
import anyio.abc

from folio.config import NavigationConfig
from folio.errors import ConfigurationError, NavigationError
from folio.navigation.guard import NavigationGuard, RedirectToLogin
from folio.navigation.history import HistoryEntry, MemoryHistory
from folio.navigation.scroll import ScrollAction, ScrollController, ScrollIntent, ScrollPosition
from folio.routing import NamedTarget, ResolvedNavigation, RouteTable, parse_location

logger = logging.getLogger("folio.navigation")

Listener: TypeAlias = Callable[[ResolvedNavigation, ResolvedNavigation | None], None]


class NavigationFailureType(enum.Enum):
    """Why a navigation did not commit."""

    CANCELLED = "cancelled"  # superseded by a newer navigation
    DUPLICATED = "duplicated"  # already at that location
    ABORTED = "aborted"  # nothing to go to (history edge)


@dataclass(frozen=True, slots=True)
class NavigationResult:
    """Outcome of ``push``/``replace``/``go``.

    ``location`` is where the navigation ended up (after redirects), or
    the location it was heading for when it failed.
    """

    location: ResolvedNavigation | None
    failure: NavigationFailureType | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class Navigator:
    """Orchestrates route resolution, the guard, history and scrolling."""

    __slots__ = (
        "_config",
        "_guard",
        "_history",
        "_idle",
        "_inflight",
        "_listeners",
        "_pending",
        "_scroll",
        "_table",
        "_task_group",
        "last_scroll",
    )

    def __init__(
        self,
        table: RouteTable,
        guard: NavigationGuard,
        scroll: ScrollController,
        config: NavigationConfig | None = None,
        history: MemoryHistory | None = None,
    ) -> None:
        self._config = config or guard.config
        self._config.validate()
        # Guard, scroll controller and mode flag must agree on prefix and timing
        for part, other in (("guard", guard.config), ("scroll controller", scroll.config)):
            if other != self._config:
                msg = (
                    f"The {part} was built with a different NavigationConfig than the "
                    f"navigator; pass the same config to all three."
                )
                raise ConfigurationError(msg)
        self._table = table
        self._guard = guard
        self._scroll = scroll
        self._history = history or MemoryHistory(self._config.base_url)
        self._listeners: list[Listener] = []
        self._pending = 0
        self._inflight = 0
        self._idle: anyio.Event | None = None
        self._task_group: anyio.abc.TaskGroup | None = None
        self.last_scroll: ScrollAction | None = None

    # -- lifecycle --

    async def __aenter__(self) -> Navigator:
        self._task_group = anyio.create_task_group()
        await self._task_group.__aenter__()
        self._idle = anyio.Event()
        self._idle.set()
        self._scroll.bind()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        assert self._task_group is not None
        self._scroll.cancel_pending()
        self._task_group.cancel_scope.cancel()
        try:
            return await self._task_group.__aexit__(exc_type, exc, tb)
        finally:
            self._task_group = None

    # -- state --

    @property
    def config(self) -> NavigationConfig:
        return self._config

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def history(self) -> MemoryHistory:
        return self._history

    @property
    def current(self) -> ResolvedNavigation | None:
        entry = self._history.current
        return entry.location if entry is not None else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(to, from_)* after every commit. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def href(self, target: str | NamedTarget) -> str:
        """The address-bar URL for *target*, without navigating."""
        return self._history.href(self._table.resolve(target).full_path)

    async def settled(self) -> None:
        """Wait until every scheduled scroll restoration has finished."""
        if self._idle is not None:
            await self._idle.wait()

    # -- navigation --

    async def start(self, url: str = "/") -> NavigationResult:
        """Initial navigation from the address bar URL."""
        return await self._navigate(self._history.strip_base(url), replace_entry=True)

    async def push(
        self,
        target: str | NamedTarget,
        *,
        intent: ScrollIntent | None = None,
    ) -> NavigationResult:
        """Navigate to *target*, adding a history entry.

        *intent* is stored on the entry being left and applied when the
        user comes back to it.
        """
        return await self._navigate(target, intent=intent)

    async def replace(self, target: str | NamedTarget) -> NavigationResult:
        """Navigate to *target*, replacing the current history entry."""
        return await self._navigate(target, replace_entry=True)

    async def back(self) -> NavigationResult:
        return await self.go(-1)

    async def forward(self) -> NavigationResult:
        return await self.go(1)

    async def go(self, delta: int) -> NavigationResult:
        """Reactivate the history entry *delta* steps away."""
        self._require_running()
        if delta == 0 or not self._history.can_go(delta):
            return NavigationResult(self.current, NavigationFailureType.ABORTED)

        nav_id = self._begin()
        entry = self._history.peek(delta)
        decision = await self._guard.check(entry.location)
        if nav_id != self._pending:
            return self._cancelled(entry.location)
        if isinstance(decision, RedirectToLogin):
            # Stay put and push the login view instead
            return await self._navigate(self._guard.login_target(decision))

        from_ = self.current
        self._remember_position(self._history.current)
        self._history.go(delta)
        logger.debug("Traversed %+d to %s", delta, entry.location.full_path)
        self._committed(
            entry.location,
            from_,
            saved=entry.saved_position,
            intent=entry.take_intent(),
        )
        return NavigationResult(entry.location)

    async def _navigate(
        self,
        target: str | NamedTarget,
        *,
        replace_entry: bool = False,
        intent: ScrollIntent | None = None,
    ) -> NavigationResult:
        self._require_running()
        nav_id = self._begin()
        to = self._table.resolve(target)

        hops = 0
        while True:
            decision = await self._guard.check(to)
            if nav_id != self._pending:
                return self._cancelled(to)

            if isinstance(decision, RedirectToLogin):
                next_target: str | NamedTarget = self._guard.login_target(decision)
            elif to.redirect_to is not None:
                # Record redirects keep the query string and fragment
                next_target = replace(
                    parse_location(to.redirect_to), query=to.query, fragment=to.fragment
                ).full_path
            else:
                break

            hops += 1
            if hops > self._config.max_redirects:
                origin = (to.redirected_from or to).full_path
                msg = f"Too many redirects while navigating to {origin!r}"
                raise NavigationError(msg)
            logger.debug("Redirecting %s -> %s", to.full_path, next_target)
            to = self._table.resolve(next_target).with_redirected_from(to)

        from_ = self.current
        if from_ is not None and from_.full_path == to.full_path:
            return NavigationResult(to, NavigationFailureType.DUPLICATED)

        leaving = self._history.current
        if replace_entry:
            self._history.replace(to)
        else:
            self._remember_position(leaving)
            if leaving is not None and intent is not None:
                leaving.intent = intent
            self._history.push(to)

        logger.debug("Committed %s", to.full_path)
        self._committed(to, from_)
        return NavigationResult(to)

    # -- internals --

    def _require_running(self) -> None:
        if self._task_group is None:
            msg = "Navigator is not running; enter it with 'async with navigator:' first."
            raise NavigationError(msg)

    def _begin(self) -> int:
        self._pending += 1
        return self._pending

    def _cancelled(self, to: ResolvedNavigation) -> NavigationResult:
        logger.debug("Discarding superseded navigation to %s", to.full_path)
        return NavigationResult(to, NavigationFailureType.CANCELLED)

    def _remember_position(self, entry: HistoryEntry | None) -> None:
        if entry is not None:
            entry.saved_position = self._scroll.current_position()

    def _committed(
        self,
        to: ResolvedNavigation,
        from_: ResolvedNavigation | None,
        *,
        saved: ScrollPosition | None = None,
        intent: ScrollIntent | None = None,
    ) -> None:
        for listener in list(self._listeners):
            listener(to, from_)
        self._schedule_scroll(to, saved, intent)

    def _schedule_scroll(
        self,
        to: ResolvedNavigation,
        saved: ScrollPosition | None,
        intent: ScrollIntent | None,
    ) -> None:
        assert self._task_group is not None
        if self._inflight == 0:
            self._idle = anyio.Event()
        self._inflight += 1
        ticket = self._scroll.next_ticket()
        self._task_group.start_soon(self._run_scroll, to, saved, intent, ticket)

    async def _run_scroll(
        self,
        to: ResolvedNavigation,
        saved: ScrollPosition | None,
        intent: ScrollIntent | None,
        ticket: int,
    ) -> None:
        try:
            action = await self._scroll.restore(to, saved=saved, intent=intent, ticket=ticket)
        except Exception:
            # A broken viewport loses this scroll, not the navigator
            logger.exception("Scroll restoration failed for %s", to.full_path)
        else:
            if action is not None:
                self.last_scroll = action
        finally:
            self._inflight -= 1
            if self._inflight == 0 and self._idle is not None:
                self._idle.set()
