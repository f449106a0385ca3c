"""``opscope check`` — validate operation definitions.

Builds the catalog and prints a summary. Exits with code 1 and the error
message when construction fails (duplicate key, cycle, undefined child,
malformed entry).
"""

import argparse

from opscope.cli._resolve import load_catalog


def run_check(args: argparse.Namespace) -> None:
    catalog = load_catalog(args)
    print(
        f"OK: {len(catalog)} operations, {len(catalog.modules())} modules "
        f"({len(catalog.admin_operations())} admin, {len(catalog.user_operations())} user)"
    )
