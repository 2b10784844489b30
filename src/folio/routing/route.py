"""Route records, typed metadata and resolution results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from folio.routing.location import QueryParams


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``/authors``            (is_param=False)
    Param:     ``/{name}``             (is_param=True, param_name="name")
    Typed:     ``/{id:int}``           (is_param=True, param_name="id", param_type="int")
    Catch-all: ``/{path_match:path}``  (is_param=True, param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class RouteMeta:
    """Typed route metadata.

    Every recognised option is a field; there is no free-form bag.
    Metadata set on a parent record applies to all of its descendants.

    Attributes:
        requires_auth: Navigation needs an active session.
        scroll_to_top: Always open this route at the top of the page.
    """

    requires_auth: bool = False
    scroll_to_top: bool = False

    def merge(self, other: RouteMeta) -> RouteMeta:
        """Combine two metadata values; a flag set on either side wins."""
        return RouteMeta(
            requires_auth=self.requires_auth or other.requires_auth,
            scroll_to_top=self.scroll_to_top or other.scroll_to_top,
        )


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """A declarative route definition.

    Child paths are relative to the parent. An empty child path marks a
    layout record that wraps its children without adding a segment.
    A relative ``redirect`` is resolved against the parent's path.
    """

    path: str
    view: str | None = None
    name: str | None = None
    meta: RouteMeta = field(default_factory=RouteMeta)
    children: tuple[RouteRecord, ...] = ()
    redirect: str | None = None
    props: bool = False


@dataclass(frozen=True, slots=True)
class NamedTarget:
    """Navigation target addressed by route name instead of by path."""

    name: str
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    fragment: str = ""


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful path match.

    ``matched`` is the record chain from the outermost ancestor to the
    record that owns the path. ``pattern`` is the leaf's full path
    pattern; ``parent_pattern`` is its parent's, used to resolve
    relative redirects.
    """

    matched: tuple[RouteRecord, ...]
    params: dict[str, str]
    pattern: str
    parent_pattern: str = "/"

    @property
    def leaf(self) -> RouteRecord:
        return self.matched[-1]


@dataclass(frozen=True, slots=True)
class ResolvedNavigation:
    """A navigation target resolved against the route table.

    ``redirect_to`` is the concrete path a redirect record points at;
    ``redirected_from`` is the first navigation of a redirect chain.
    """

    path: str
    matched: tuple[RouteRecord, ...]
    params: dict[str, str] = field(default_factory=dict)
    query: QueryParams = field(default_factory=QueryParams)
    fragment: str = ""
    full_path: str = ""
    redirect_to: str | None = None
    redirected_from: ResolvedNavigation | None = None

    @property
    def leaf(self) -> RouteRecord:
        return self.matched[-1]

    @property
    def name(self) -> str | None:
        return self.leaf.name

    @property
    def view(self) -> str | None:
        return self.leaf.view

    @property
    def meta(self) -> RouteMeta:
        """Metadata merged over the whole matched chain."""
        merged = RouteMeta()
        for record in self.matched:
            merged = merged.merge(record.meta)
        return merged

    def with_redirected_from(self, origin: ResolvedNavigation) -> ResolvedNavigation:
        """Return a copy remembering the navigation that redirected here."""
        first = origin.redirected_from or origin
        return replace(self, redirected_from=first)
