"""``opscope tree`` and ``opscope urls`` — documentation exports."""

import argparse
import json
import sys

from opscope.cli._resolve import load_catalog
from opscope.errors import UnknownOperationError


def run_tree(args: argparse.Namespace) -> None:
    """Print one subtree, or the whole forest, as JSON."""
    catalog = load_catalog(args)
    try:
        data = catalog.serialize_tree(args.key) if args.key else catalog.serialize()
    except UnknownOperationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(json.dumps(data, indent=args.indent))


def run_urls(args: argparse.Namespace) -> None:
    """Print the effective URLs of an operation, one per line."""
    catalog = load_catalog(args)
    try:
        urls = catalog.effective_urls(args.key)
    except UnknownOperationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    for url in urls:
        print(url)
