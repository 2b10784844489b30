"""Folio — navigation for a magazine front-end.

Route table, session guard, scroll restoration and the editor-mode flag
for the reading views and the admin back-office.

Basic usage::

    from folio import NavigationGuard, Navigator, ScrollController, build_route_table

    navigator = Navigator(
        build_route_table(),
        NavigationGuard(backend_sessions),
        ScrollController(window),
    )
    async with navigator:
        await navigator.start("/home")
        await navigator.push("/admin/issues")  # -> /login?redirect=%2Fadmin%2Fissues
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "EditorMode",
    "FolioError",
    "ForceTop",
    "NamedTarget",
    "NavigationConfig",
    "NavigationError",
    "NavigationGuard",
    "NavigationResult",
    "Navigator",
    "NotFound",
    "ResolvedNavigation",
    "RouteMeta",
    "RouteRecord",
    "RouteTable",
    "ScrollController",
    "ScrollPosition",
    "ScrollToSelector",
    "build_route_table",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "folio.errors",
    "FolioError": "folio.errors",
    "NavigationError": "folio.errors",
    "NotFound": "folio.errors",
    "NavigationConfig": "folio.config",
    "NamedTarget": "folio.routing",
    "ResolvedNavigation": "folio.routing",
    "RouteMeta": "folio.routing",
    "RouteRecord": "folio.routing",
    "RouteTable": "folio.routing",
    "build_route_table": "folio.routes",
    "EditorMode": "folio.navigation",
    "ForceTop": "folio.navigation",
    "NavigationGuard": "folio.navigation",
    "NavigationResult": "folio.navigation",
    "Navigator": "folio.navigation",
    "ScrollController": "folio.navigation",
    "ScrollPosition": "folio.navigation",
    "ScrollToSelector": "folio.navigation",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import folio`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
