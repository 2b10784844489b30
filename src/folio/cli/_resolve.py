"""``folio resolve`` — show how one URL resolves.

Follows record redirects the way the navigator does and reports whether
the guard would ask the backend for a session at each hop.
"""

import argparse
import sys
from dataclasses import replace

from folio.config import NavigationConfig
from folio.errors import ConfigurationError, NotFound
from folio.navigation.guard import under_prefix
from folio.routes import build_route_table
from folio.routing import RouteRecord, parse_location


def run_resolve(args: argparse.Namespace) -> None:
    """Print the matched chain, params and redirect hops for ``args.url``."""
    config = NavigationConfig(admin_prefix=args.admin_prefix)
    try:
        config.validate()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    table = build_route_table()
    target = args.url
    for _hop in range(config.max_redirects + 1):
        try:
            nav = table.resolve(target)
        except NotFound as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

        chain = " > ".join(_label(r) for r in nav.matched)
        guarded = nav.meta.requires_auth or under_prefix(nav.path, config.admin_prefix)
        print(f"{nav.full_path}")
        print(f"  chain:   {chain}")
        if nav.params:
            params = ", ".join(f"{k}={v}" for k, v in nav.params.items())
            print(f"  params:  {params}")
        print(f"  session: {'required' if guarded else 'not required'}")

        if nav.redirect_to is None:
            return
        print(f"  redirect -> {nav.redirect_to}")
        target = replace(
            parse_location(nav.redirect_to), query=nav.query, fragment=nav.fragment
        ).full_path

    print("Error: too many redirects", file=sys.stderr)
    raise SystemExit(1)


def _label(record: RouteRecord) -> str:
    if record.view:
        return record.view
    if record.redirect is not None:
        return f"-> {record.redirect}"
    return record.path or "(group)"
