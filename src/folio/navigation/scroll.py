"""Scroll restoration — where the page lands after a navigation.

Runs once per committed navigation, after a settle delay that gives
asynchronously loaded content a chance to reach the document. The first
matching rule wins:

1. Destination is a top view (or its chain sets ``scroll_to_top``) -> (0, 0)
2. The reactivated entry carries ``ForceTop`` -> (0, 0)
3. The entry carries ``ScrollToSelector`` and the element exists -> element, start
4. A saved position exists (back/forward) -> that position
5. The URL fragment names an existing element -> element, configured block
6. Otherwise -> (0, 0)

A missing element is never an error; the rule is skipped. Browser-native
restoration is turned off so this controller owns the scroll position.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeAlias

import anyio

from folio.config import NavigationConfig
from folio.routing import ResolvedNavigation

logger = logging.getLogger("folio.scroll")


@dataclass(frozen=True, slots=True)
class ScrollPosition:
    left: float = 0
    top: float = 0


TOP = ScrollPosition()


# ---------------------------------------------------------------------------
# Intents: what a page asks for when the user comes back to it
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ForceTop:
    """Open at the top of the page, ignoring any saved position."""


@dataclass(frozen=True, slots=True)
class ScrollToSelector:
    """Bring the element matching ``selector`` into view, e.g. ``"#article-42"``."""

    selector: str


ScrollIntent: TypeAlias = ForceTop | ScrollToSelector


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScrollToPosition:
    position: ScrollPosition


@dataclass(frozen=True, slots=True)
class ScrollToElement:
    selector: str
    block: str = "start"


ScrollAction: TypeAlias = ScrollToPosition | ScrollToElement


class Viewport(Protocol):
    """The browser window and document, as seen by the controller."""

    def disable_native_restoration(self) -> None: ...

    def current_position(self) -> ScrollPosition: ...

    def has_element(self, selector: str) -> bool: ...

    def scroll_to(self, position: ScrollPosition) -> None: ...

    def scroll_into_view(self, selector: str, block: str) -> None: ...


def decide_scroll(
    to: ResolvedNavigation,
    *,
    viewport: Viewport,
    saved: ScrollPosition | None = None,
    intent: ScrollIntent | None = None,
    config: NavigationConfig | None = None,
) -> ScrollAction:
    """Pick the scroll action for a committed navigation."""
    cfg = config or NavigationConfig()

    if to.view in cfg.top_views or to.meta.scroll_to_top:
        return ScrollToPosition(TOP)

    if isinstance(intent, ForceTop):
        return ScrollToPosition(TOP)

    if isinstance(intent, ScrollToSelector) and viewport.has_element(intent.selector):
        return ScrollToElement(intent.selector, block="start")

    if saved is not None:
        return ScrollToPosition(saved)

    if to.fragment:
        selector = f"#{to.fragment}"
        if viewport.has_element(selector):
            return ScrollToElement(selector, block=cfg.anchor_block)

    return ScrollToPosition(TOP)


class ScrollController:
    """Applies ``decide_scroll`` to the viewport after the settle delay.

    Every ``restore()`` call draws a ticket. A call whose ticket is no
    longer the latest when its delay ends does nothing, so a slow
    restore for an earlier page cannot move a newer one.
    """

    __slots__ = ("_config", "_generation", "_viewport")

    def __init__(self, viewport: Viewport, config: NavigationConfig | None = None) -> None:
        self._viewport = viewport
        self._config = config or NavigationConfig()
        self._generation = 0

    @property
    def config(self) -> NavigationConfig:
        return self._config

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    def bind(self) -> None:
        """Take over scroll position from the browser."""
        self._viewport.disable_native_restoration()

    def current_position(self) -> ScrollPosition:
        return self._viewport.current_position()

    def next_ticket(self) -> int:
        """Draw a ticket; every earlier ticket becomes stale."""
        self._generation += 1
        return self._generation

    def cancel_pending(self) -> None:
        """Invalidate every restore that has not applied yet."""
        self._generation += 1

    async def restore(
        self,
        to: ResolvedNavigation,
        *,
        saved: ScrollPosition | None = None,
        intent: ScrollIntent | None = None,
        ticket: int | None = None,
    ) -> ScrollAction | None:
        """Wait for the page to settle, then scroll.

        Pass the *ticket* drawn at commit time; without one a fresh ticket
        is drawn. Returns the applied action, or ``None`` when a newer
        navigation superseded this one during the delay.
        """
        if ticket is None:
            ticket = self.next_ticket()

        if self._config.settle_delay:
            await anyio.sleep(self._config.settle_delay)

        if ticket != self._generation:
            logger.debug("Dropping stale scroll restore for %s", to.full_path)
            return None

        action = decide_scroll(
            to,
            viewport=self._viewport,
            saved=saved,
            intent=intent,
            config=self._config,
        )
        self._apply(action)
        return action

    def _apply(self, action: ScrollAction) -> None:
        if isinstance(action, ScrollToElement):
            self._viewport.scroll_into_view(action.selector, action.block)
        else:
            self._viewport.scroll_to(action.position)
