"""``folio routes`` — list the compiled route table.

Prints every matchable path with its name, target (view or redirect),
and whether the chain requires a session.
"""

import argparse

from folio.routes import build_route_table


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATH, NAME, TARGET and AUTH."""
    table = build_route_table()

    rows: list[tuple[str, str, str, str]] = []
    for match in table.routes:
        leaf = match.leaf
        target = leaf.view or f"-> {leaf.redirect}"
        layouts = [r.view for r in match.matched[:-1] if r.view]
        if layouts:
            target = f"{' > '.join(layouts)} > {target}"
        requires_auth = any(r.meta.requires_auth for r in match.matched)
        rows.append((match.pattern, leaf.name or "", target, "yes" if requires_auth else ""))

    # Column widths
    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    max_name = max(max(len(r[1]) for r in rows), 4)  # "NAME" header
    max_target = max(max(len(r[2]) for r in rows), 6)  # "TARGET" header

    fmt = f"{{:<{max_path}}}  {{:<{max_name}}}  {{:<{max_target}}}  {{}}"
    print(fmt.format("PATH", "NAME", "TARGET", "AUTH"))
    print("-" * min(max_path + max_name + max_target + 10, 100))
    for row in rows:
        print(fmt.format(*row).rstrip())
