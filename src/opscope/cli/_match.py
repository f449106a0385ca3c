"""``opscope match`` — which operations cover a request path.

Without ``--grant``, lists every operation whose own URLs match the path.
With one or more ``--grant KEY``, prints the authorization decision for
those granted operations and exits with code 1 on a denial.
"""

import argparse

from opscope.authz import authorize
from opscope.cli._resolve import load_catalog


def run_match(args: argparse.Namespace) -> None:
    catalog = load_catalog(args)

    if args.grant:
        decision = authorize(catalog, args.path, args.grant)
        print(f"{'ALLOW' if decision.allowed else 'DENY'} {args.path}")
        if decision.matched:
            print(f"  matched: {', '.join(decision.matched)}")
        if decision.unknown:
            print(f"  unknown: {', '.join(decision.unknown)}")
        if not decision.allowed:
            raise SystemExit(1)
        return

    matches = catalog.matching(args.path)
    if not matches:
        print(f"No operation matches {args.path!r}.")
        return

    rows = [(op.key, catalog.type_of(op).value, ", ".join(op.urls)) for op in matches]
    max_key = max(max(len(r[0]) for r in rows), 3)  # "KEY" header
    max_type = max(max(len(r[1]) for r in rows), 4)  # "TYPE" header

    fmt = f"{{:<{max_key}}}  {{:<{max_type}}}  {{}}"
    print(fmt.format("KEY", "TYPE", "URLS"))
    sep_len = max_key + max_type + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
