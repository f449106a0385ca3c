"""Opscope CLI — inspect and validate operation catalogs.

Entry point registered as ``opscope`` in ``pyproject.toml``::

    [project.scripts]
    opscope = "opscope.cli:main"
"""

import argparse
import sys


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog",
        default=None,
        help="Import string of a catalog or catalog factory (e.g. myapp.rbac:catalog)",
    )
    source.add_argument(
        "--file",
        default=None,
        help="JSON file of operation definitions",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``opscope`` command."""
    parser = argparse.ArgumentParser(
        prog="opscope",
        description="opscope — hierarchical operation permissions for URL-based access control.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- opscope tree -----------------------------------------------------
    tree_parser = subparsers.add_parser("tree", help="Export the operation tree as JSON")
    tree_parser.add_argument("key", nargs="?", default=None, help="Subtree root (default: all modules)")
    tree_parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    _add_source_options(tree_parser)

    # -- opscope urls -----------------------------------------------------
    urls_parser = subparsers.add_parser("urls", help="List the effective URLs of an operation")
    urls_parser.add_argument("key", help="Operation key")
    _add_source_options(urls_parser)

    # -- opscope match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which operations cover a path")
    match_parser.add_argument("path", help="Request path (e.g. /v1/analytics/dashboards/1)")
    match_parser.add_argument(
        "--grant",
        action="append",
        default=[],
        metavar="KEY",
        help="Granted operation key; repeat to grant several",
    )
    _add_source_options(match_parser)

    # -- opscope check ----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate operation definitions")
    _add_source_options(check_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "tree":
        from opscope.cli._tree import run_tree

        run_tree(args)
    elif args.command == "urls":
        from opscope.cli._tree import run_urls

        run_urls(args)
    elif args.command == "match":
        from opscope.cli._match import run_match

        run_match(args)
    elif args.command == "check":
        from opscope.cli._check import run_check

        run_check(args)
