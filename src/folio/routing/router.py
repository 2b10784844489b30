"""Compiled route table with trie-based path matching.

Nested route records are flattened into an immutable lookup structure
when the table compiles. Each terminal keeps the full record chain so
layout records and inherited metadata survive matching.
"""

import re
from dataclasses import dataclass, replace
from urllib.parse import quote, unquote

from folio.errors import ConfigurationError, NotFound
from folio.routing.location import SEGMENT_SAFE, Location, QueryParams, parse_location
from folio.routing.params import CONVERTERS, pattern_for
from folio.routing.route import (
    NamedTarget,
    PathSegment,
    ResolvedNavigation,
    RouteMatch,
    RouteRecord,
)

_FOREIGN_PARAM = re.compile(r"^(?:<[^>]+>|:\w+.*)$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/authors"                -> [PathSegment("authors")]
        "/authors/{name}"         -> [PathSegment("authors"), PathSegment("{name}", is_param=True, ...)]
        "/articles/{id:int}"      -> [..., PathSegment("{id:int}", is_param=True, param_type="int")]
        "/{path_match:path}"      -> [PathSegment("{path_match:path}", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if _FOREIGN_PARAM.match(part):
            msg = (
                f"Route path {path!r} uses {part!r}; folio expects {{param}} "
                f"segments (not <param> or :param), e.g. '/articles/{{id}}'."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown parameter type {param_type!r} in route path {path!r}"
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def join_paths(parent: str, child: str) -> str:
    """Join a child record path onto its parent's full path."""
    if child.startswith("/"):
        return "/" + child.strip("/")
    if not child:
        return parent
    if parent == "/":
        return f"/{child.strip('/')}"
    return f"{parent.rstrip('/')}/{child.strip('/')}"


def build_path(pattern: str, params: dict[str, str]) -> str:
    """Substitute *params* into a path pattern, percent-encoding values.

    Raises ``ConfigurationError`` if a parameter is missing.
    """
    parts: list[str] = []
    for seg in parse_path(pattern):
        if not seg.is_param:
            parts.append(seg.value)
            continue
        name = seg.param_name or ""
        if name not in params:
            msg = f"Missing parameter {name!r} for route path {pattern!r}"
            raise ConfigurationError(msg)
        safe = f"/{SEGMENT_SAFE}" if seg.param_type == "path" else SEGMENT_SAFE
        parts.append(quote(str(params[name]), safe=safe))
    return "/" + "/".join(parts)


@dataclass(slots=True)
class _Terminal:
    """A matchable record and everything needed to resolve it."""

    chain: tuple[RouteRecord, ...]
    pattern: str
    parent_pattern: str


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all", "children", "param_child", "terminal")

    def __init__(self) -> None:
        # Static segment children: "authors" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all edge (path converter)
        self.catch_all: _CatchAllEdge | None = None
        # Record owning the path that ends at this node
        self.terminal: _Terminal | None = None


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge — consumes the remaining path."""

    param_name: str
    terminal: _Terminal


class RouteTable:
    """Compiled route table.

    Usage::

        table = RouteTable()
        table.add(RouteRecord("/articles/{id}", view="ArticleContent", name="article-detail"))
        table.add(RouteRecord("/{path_match:path}", redirect="/home"))
        table.compile()
        nav = table.resolve("/articles/42#comments")
    """

    __slots__ = ("_compiled", "_names", "_records", "_root", "_terminals")

    def __init__(self, records: list[RouteRecord] | None = None) -> None:
        self._root = _TrieNode()
        self._compiled = False
        self._records: list[RouteRecord] = []
        self._terminals: list[_Terminal] = []
        # Route name -> full path pattern
        self._names: dict[str, str] = {}
        for record in records or ():
            self.add(record)

    def add(self, record: RouteRecord) -> None:
        """Add a top-level record and its children. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._records.append(record)
        self._register(record, (), "/")

    def _register(
        self,
        record: RouteRecord,
        ancestors: tuple[RouteRecord, ...],
        parent_pattern: str,
    ) -> None:
        pattern = join_paths(parent_pattern, record.path)
        chain = (*ancestors, record)

        if record.name is not None:
            if record.name in self._names:
                msg = f"Duplicate route name {record.name!r}"
                raise ConfigurationError(msg)
            self._names[record.name] = pattern

        # Children first: an empty-path child owns its parent's path
        for child in record.children:
            self._register(child, chain, pattern)

        if record.view is None and record.redirect is None:
            return
        self._insert(_Terminal(chain=chain, pattern=pattern, parent_pattern=parent_pattern))

    def _insert(self, terminal: _Terminal) -> None:
        record = terminal.chain[-1]
        node = self._root

        for seg in parse_path(terminal.pattern):
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all is not None:
                    self._conflict(node.catch_all.terminal, terminal)
                    return
                node.catch_all = _CatchAllEdge(
                    param_name=seg.param_name or "path",
                    terminal=terminal,
                )
                self._terminals.append(terminal)
                return

            if seg.is_param:
                edge = node.param_child
                if edge is None:
                    edge = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=re.compile(f"^{pattern_for(seg.param_type)}$"),
                        node=_TrieNode(),
                    )
                    node.param_child = edge
                elif (edge.param_name, edge.param_type) != (seg.param_name, seg.param_type):
                    msg = (
                        f"Ambiguous parameter {seg.value!r} in {terminal.pattern!r}: "
                        f"this level already captures '{{{edge.param_name}:{edge.param_type}}}'"
                    )
                    raise ConfigurationError(msg)
                node = edge.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        if node.terminal is not None:
            if any(r is record for r in node.terminal.chain):
                # A descendant layout/index record already owns this path
                return
            self._conflict(node.terminal, terminal)
        node.terminal = terminal
        self._terminals.append(terminal)

    @staticmethod
    def _conflict(existing: _Terminal, new: _Terminal) -> None:
        msg = (
            f"Duplicate route path {new.pattern!r}: already declared by "
            f"{_describe(existing.chain[-1])}"
        )
        raise ConfigurationError(msg)

    def compile(self) -> None:
        """Freeze the table. No more records can be added."""
        self._compiled = True

    @property
    def records(self) -> list[RouteRecord]:
        """Top-level records in declaration order."""
        return list(self._records)

    @property
    def routes(self) -> list[RouteMatch]:
        """Every matchable path, as an unparameterised ``RouteMatch``.

        Useful for introspection (``folio routes``).
        """
        return [
            RouteMatch(
                matched=t.chain,
                params={},
                pattern=t.pattern,
                parent_pattern=t.parent_pattern,
            )
            for t in self._terminals
        ]

    def has_route(self, name: str) -> bool:
        return name in self._names

    def path_for(self, name: str, /, **params: str) -> str:
        """Build the URL path for a named route.

        *name* is positional-only so a route may declare a '{name}' param.

        Raises ``ConfigurationError`` for unknown names or missing params.
        """
        try:
            pattern = self._names[name]
        except KeyError:
            msg = f"No route named {name!r}"
            raise ConfigurationError(msg) from None
        return build_path(pattern, params)

    def match(self, path: str) -> RouteMatch:
        """Match a request path against the compiled records.

        *path* is split on literal slashes before segments are decoded, so
        ``/authors/AC%2FDC`` captures ``name="AC/DC"``.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no record matches the path.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})
        if result is None:
            raise NotFound(path)

        terminal, params = result
        return RouteMatch(
            matched=terminal.chain,
            params=params,
            pattern=terminal.pattern,
            parent_pattern=terminal.parent_pattern,
        )

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[_Terminal, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed — return this node's record
        if index == len(parts):
            if node.terminal is not None:
                return node.terminal, params
            return None

        raw = parts[index]
        part = unquote(raw)

        # 1. Try static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Try parameter child
        if node.param_child is not None:
            edge = node.param_child
            # Converters see the escaped segment; params get the decoded value
            if edge.regex.match(raw):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params)
                if result is not None:
                    return result

        # 3. Try catch-all
        if node.catch_all is not None:
            remaining = unquote("/".join(parts[index:]))
            return node.catch_all.terminal, {**params, node.catch_all.param_name: remaining}

        return None

    def resolve(self, target: str | NamedTarget) -> ResolvedNavigation:
        """Resolve a full path or a named target into a ``ResolvedNavigation``.

        Raises ``NotFound`` if the path matches nothing,
        ``ConfigurationError`` for an unknown name or missing params.
        """
        if isinstance(target, NamedTarget):
            location = replace(
                parse_location(self.path_for(target.name, **target.params)),
                query=QueryParams(target.query),
                fragment=target.fragment,
            )
        else:
            location = parse_location(target)
        return self._resolve_location(location)

    def _resolve_location(self, location: Location) -> ResolvedNavigation:
        match = self.match(location.path)
        redirect_to = None
        if match.leaf.redirect is not None:
            redirect_to = build_path(
                join_paths(match.parent_pattern, match.leaf.redirect),
                match.params,
            )
        return ResolvedNavigation(
            path=location.path,
            matched=match.matched,
            params=match.params,
            query=location.query,
            fragment=location.fragment,
            full_path=location.full_path,
            redirect_to=redirect_to,
        )


def _describe(record: RouteRecord) -> str:
    if record.name:
        return f"route {record.name!r}"
    if record.view:
        return f"view {record.view!r}"
    return f"redirect to {record.redirect!r}"
