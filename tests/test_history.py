"""Tests for folio.navigation.history — in-memory history stack."""

import pytest

from folio.navigation.history import MemoryHistory
from folio.navigation.scroll import ForceTop
from folio.routes import build_route_table


@pytest.fixture(scope="module")
def table():
    return build_route_table()


def _history(table, *paths: str) -> MemoryHistory:
    history = MemoryHistory()
    for path in paths:
        history.push(table.resolve(path))
    return history


class TestMemoryHistory:
    def test_empty(self) -> None:
        history = MemoryHistory()
        assert history.current is None
        assert history.index == -1
        assert len(history) == 0

    def test_push_moves_cursor(self, table) -> None:
        history = _history(table, "/home", "/mission")
        assert history.index == 1
        assert history.current.location.path == "/mission"

    def test_push_drops_forward_entries(self, table) -> None:
        history = _history(table, "/home", "/mission", "/search")
        history.go(-2)
        history.push(table.resolve("/authors"))
        assert [e.location.path for e in history.entries] == ["/home", "/authors"]

    def test_replace(self, table) -> None:
        history = _history(table, "/home", "/mission")
        history.replace(table.resolve("/search"))
        assert [e.location.path for e in history.entries] == ["/home", "/search"]

    def test_replace_on_empty_pushes(self, table) -> None:
        history = MemoryHistory()
        history.replace(table.resolve("/home"))
        assert history.index == 0

    def test_can_go(self, table) -> None:
        history = _history(table, "/home", "/mission")
        assert history.can_go(-1) is True
        assert history.can_go(1) is False
        assert history.can_go(-2) is False

    def test_go_out_of_range(self, table) -> None:
        history = _history(table, "/home")
        with pytest.raises(IndexError, match="Cannot go"):
            history.go(1)

    def test_peek_does_not_move(self, table) -> None:
        history = _history(table, "/home", "/mission")
        assert history.peek(-1).location.path == "/home"
        assert history.index == 1

    def test_intent_taken_once(self, table) -> None:
        history = _history(table, "/home")
        history.current.intent = ForceTop()
        assert history.current.take_intent() == ForceTop()
        assert history.current.take_intent() is None


class TestBase:
    def test_href(self) -> None:
        assert MemoryHistory("/magazine/").href("/home") == "/magazine/home"

    def test_href_root_base(self) -> None:
        assert MemoryHistory("/").href("/home") == "/home"

    def test_strip_base(self) -> None:
        history = MemoryHistory("/magazine")
        assert history.strip_base("/magazine/articles/3") == "/articles/3"
        assert history.strip_base("/magazine") == "/"
        assert history.strip_base("/magazines") == "/magazines"
