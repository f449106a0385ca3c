"""Where a subcommand's catalog comes from.

``--catalog module:attr`` wins over ``--file defs.json``; with neither,
the built-in analytics catalog is used.
"""

import argparse
import importlib
import sys

from opscope.catalog import OperationCatalog
from opscope.errors import OpscopeError


def resolve_catalog(import_string: str) -> OperationCatalog:
    """Import ``module[:attr]`` and return the catalog it names.

    ``attr`` defaults to ``catalog``. If it names a zero-argument callable
    rather than a catalog, the callable is invoked and its result used.
    Import and attribute errors propagate unchanged; anything that does not
    end up as an ``OperationCatalog`` raises ``TypeError``.
    """
    module_path, _, attr_name = import_string.partition(":")
    target = getattr(importlib.import_module(module_path), attr_name or "catalog")

    if callable(target) and not isinstance(target, OperationCatalog):
        try:
            target = target()
        except OpscopeError:
            raise
        except Exception as exc:
            msg = f"Calling {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(target, OperationCatalog):
        msg = f"Expected an OperationCatalog from {import_string!r}, got {type(target).__name__}"
        raise TypeError(msg)
    return target


def load_catalog(args: argparse.Namespace) -> OperationCatalog:
    """Return the catalog selected by the command line, or exit with status 1."""
    try:
        if args.catalog:
            return resolve_catalog(args.catalog)
        if args.file:
            from opscope.loader import load_definitions

            return OperationCatalog(load_definitions(args.file))
        from opscope.definitions import default_catalog

        return default_catalog()
    except (OpscopeError, OSError, ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
