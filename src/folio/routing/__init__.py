"""Routing — nested route records compiled into a trie.

Records are registered during setup and compiled into an immutable
lookup structure before the navigator starts.
"""

from folio.routing.location import Location, QueryParams, parse_location
from folio.routing.route import NamedTarget, ResolvedNavigation, RouteMatch, RouteMeta, RouteRecord
from folio.routing.router import RouteTable, build_path, parse_path

__all__ = [
    "Location",
    "NamedTarget",
    "QueryParams",
    "ResolvedNavigation",
    "RouteMatch",
    "RouteMeta",
    "RouteRecord",
    "RouteTable",
    "build_path",
    "parse_location",
    "parse_path",
]
