"""Locations: path, query string and fragment of a navigation target.

``QueryParams`` implements ``Mapping[str, str]`` over a parsed query
string; ``Location`` splits and re-joins a full path.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from urllib.parse import parse_qs, quote, unquote, urlencode


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, query: str | Mapping[str, str | Iterable[str]] = "") -> None:
        if isinstance(query, str):
            data = parse_qs(query.lstrip("?"), keep_blank_values=True)
        else:
            data = {}
            for key, value in query.items():
                data[key] = [value] if isinstance(value, str) else list(value)
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryParams):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.encode())

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def encode(self) -> str:
        """Serialize back to a query string without the leading ``?``.

        Reserved characters, ``/`` included, are percent-encoded so the
        value survives a round trip through another URL.
        """
        return urlencode(self._data, doseq=True)


# Characters left unescaped inside a single path segment ("/" is not one)
SEGMENT_SAFE = ":@!$&'()*+,;=-._~"


@dataclass(frozen=True, slots=True)
class Location:
    """A parsed navigation target.

    ``path`` is percent-encoded segment by segment, so an escaped ``/``
    inside a segment stays distinct from a separator. Route params are
    decoded when the path is matched.
    """

    path: str
    query: QueryParams = field(default_factory=QueryParams)
    fragment: str = ""

    @property
    def full_path(self) -> str:
        result = self.path
        encoded = self.query.encode()
        if encoded:
            result += f"?{encoded}"
        if self.fragment:
            result += f"#{self.fragment}"
        return result


def encode_path(path: str) -> str:
    """Collapse repeated slashes, drop a trailing slash and give every
    segment one canonical escaping.

    ``/authors/Ada Lovelace`` and ``/authors/Ada%20Lovelace`` both become
    ``/authors/Ada%20Lovelace``; ``%2F`` stays escaped.
    """
    parts = [quote(unquote(p), safe=SEGMENT_SAFE) for p in path.split("/") if p]
    return "/" + "/".join(parts)


def parse_location(raw: str) -> Location:
    """Split ``/path?query#fragment`` into a ``Location``.

    Relative input is treated as rooted: ``articles`` -> ``/articles``.
    """
    rest, _, fragment = raw.partition("#")
    path, _, query = rest.partition("?")
    return Location(
        path=encode_path(path),
        query=QueryParams(query),
        fragment=unquote(fragment),
    )
