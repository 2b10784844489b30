"""Folio CLI — inspect the magazine route table.

Entry point registered as ``folio`` in ``pyproject.toml``::

    [project.scripts]
    folio = "folio.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``folio`` command."""
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Folio — navigation for a magazine front-end.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- folio routes -----------------------------------------------------
    subparsers.add_parser("routes", help="List every matchable route")

    # -- folio resolve ----------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Show how a URL resolves")
    resolve_parser.add_argument("url", help="Path to resolve (e.g. /admin/editor/7#body)")
    resolve_parser.add_argument(
        "--admin-prefix",
        default="/admin",
        help="Path prefix that always requires a session",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from folio.cli._routes import run_routes

        run_routes(args)
    elif args.command == "resolve":
        from folio.cli._resolve import run_resolve

        run_resolve(args)
