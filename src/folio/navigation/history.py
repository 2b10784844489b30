"""In-memory session history.

Mirrors the browser's history stack: a list of entries and a cursor.
Each entry remembers the scroll position it was left at and, optionally,
a scroll intent its page registered before navigating away. The intent
is handed out once, the next time the entry becomes active.
"""

from dataclasses import dataclass

from folio.navigation.scroll import ScrollIntent, ScrollPosition
from folio.routing import ResolvedNavigation


@dataclass(slots=True)
class HistoryEntry:
    location: ResolvedNavigation
    saved_position: ScrollPosition | None = None
    intent: ScrollIntent | None = None

    def take_intent(self) -> ScrollIntent | None:
        """Return the pending intent and clear it."""
        intent, self.intent = self.intent, None
        return intent


class MemoryHistory:
    """History stack with browser semantics.

    ``push`` drops every entry after the cursor. ``go`` moves the cursor
    and raises ``IndexError`` when it would leave the stack; check
    ``can_go`` first.
    """

    __slots__ = ("_base", "_entries", "_index")

    def __init__(self, base: str = "/") -> None:
        self._base = "/" + base.strip("/") if base.strip("/") else ""
        self._entries: list[HistoryEntry] = []
        self._index = -1

    @property
    def index(self) -> int:
        return self._index

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    @property
    def current(self) -> HistoryEntry | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    def __len__(self) -> int:
        return len(self._entries)

    def href(self, full_path: str) -> str:
        """The address-bar URL for *full_path* under the history base."""
        return f"{self._base}{full_path}"

    def strip_base(self, url: str) -> str:
        """Inverse of ``href`` for URLs arriving from the address bar."""
        if self._base and (url == self._base or url.startswith(f"{self._base}/")):
            return url[len(self._base) :] or "/"
        return url

    def push(self, location: ResolvedNavigation) -> HistoryEntry:
        del self._entries[self._index + 1 :]
        entry = HistoryEntry(location)
        self._entries.append(entry)
        self._index += 1
        return entry

    def replace(self, location: ResolvedNavigation) -> HistoryEntry:
        if self._index < 0:
            return self.push(location)
        entry = HistoryEntry(location)
        self._entries[self._index] = entry
        return entry

    def can_go(self, delta: int) -> bool:
        return 0 <= self._index + delta < len(self._entries)

    def peek(self, delta: int) -> HistoryEntry:
        """The entry *delta* steps away, without moving the cursor."""
        if not self.can_go(delta):
            msg = f"Cannot go {delta:+d} from history index {self._index}"
            raise IndexError(msg)
        return self._entries[self._index + delta]

    def go(self, delta: int) -> HistoryEntry:
        entry = self.peek(delta)
        self._index += delta
        return entry
