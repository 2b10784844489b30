"""Shared fakes for the browser viewport and the backend session service."""

from collections.abc import Callable
from dataclasses import dataclass

import anyio
import pytest

from folio.config import NavigationConfig
from folio.navigation import NavigationGuard, Navigator, ScrollController, ScrollPosition
from folio.routes import build_route_table


@dataclass(frozen=True, slots=True)
class FakeSession:
    user_id: str = "editor-1"


class FakeViewport:
    """Records every scroll the controller applies."""

    def __init__(self, elements: set[str] | None = None) -> None:
        self.elements = set(elements or ())
        self.position = ScrollPosition()
        self.native_disabled = False
        self.calls: list[tuple] = []

    def disable_native_restoration(self) -> None:
        self.native_disabled = True

    def current_position(self) -> ScrollPosition:
        return self.position

    def has_element(self, selector: str) -> bool:
        return selector in self.elements

    def scroll_to(self, position: ScrollPosition) -> None:
        self.position = position
        self.calls.append(("scroll_to", position))

    def scroll_into_view(self, selector: str, block: str) -> None:
        self.calls.append(("scroll_into_view", selector, block))


class FakeSessions:
    """Session provider returning a fixed session, or raising."""

    def __init__(
        self,
        session: object | None = None,
        error: Exception | None = None,
        gate: anyio.Event | None = None,
    ) -> None:
        self.session = session
        self.error = error
        self.gate = gate
        self.calls = 0

    async def get_current_session(self) -> object | None:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.session


@pytest.fixture
def viewport() -> FakeViewport:
    return FakeViewport()


@pytest.fixture
def make_navigator(viewport: FakeViewport) -> Callable[..., Navigator]:
    """Build a navigator over the magazine routes with no settle delay."""

    def factory(sessions: FakeSessions | None = None, **overrides: object) -> Navigator:
        config = NavigationConfig(**{"settle_delay": 0.0, **overrides})
        return Navigator(
            build_route_table(),
            NavigationGuard(sessions or FakeSessions(), config),
            ScrollController(viewport, config),
            config,
        )

    return factory
