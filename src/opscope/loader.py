"""Definition sources — plain data, JSON files, and tree exports.

The built-in catalog is authored as code (``opscope.definitions``), but
the builder accepts the same shape from any source::

    [
        {"key": "analytics.dashboard.user", "urls": ["/v1/analytics/dashboards/**"]},
        {"key": "analytics.dashboard", "children": ["analytics.dashboard.user"]},
    ]

``urls`` and ``children`` are optional and default to empty.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from opscope.errors import DefinitionError, DuplicateKeyError
from opscope.operation import OperationDefinition

_log = logging.getLogger("opscope.loader")

_ALLOWED_FIELDS = frozenset({"key", "urls", "children"})


def _string_list(value: Any, field_name: str, where: str) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        msg = f"{where}: {field_name!r} must be a list of strings"
        raise DefinitionError(msg)
    if not all(isinstance(item, str) for item in value):
        msg = f"{where}: {field_name!r} must contain only strings"
        raise DefinitionError(msg)
    return tuple(value)


def definition_from_mapping(entry: Any, where: str = "definition") -> OperationDefinition:
    """Validate a single ``{"key", "urls", "children"}`` mapping.

    Raises ``DefinitionError`` naming *where* on any shape problem.
    """
    if not isinstance(entry, Mapping):
        msg = f"{where}: expected an object, got {type(entry).__name__}"
        raise DefinitionError(msg)

    unknown = set(entry) - _ALLOWED_FIELDS
    if unknown:
        msg = f"{where}: unknown field(s) {', '.join(sorted(map(str, unknown)))}"
        raise DefinitionError(msg)

    key = entry.get("key")
    if not isinstance(key, str) or not key:
        msg = f"{where}: 'key' must be a non-empty string"
        raise DefinitionError(msg)

    return OperationDefinition(
        key=key,
        urls=_string_list(entry.get("urls", ()), "urls", where),
        children=_string_list(entry.get("children", ()), "children", where),
    )


def definitions_from_data(data: Any) -> tuple[OperationDefinition, ...]:
    """Validate a list of definition mappings, keeping their order."""
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        msg = "Operation definitions must be a list"
        raise DefinitionError(msg)
    return tuple(
        definition_from_mapping(entry, where=f"definition #{index}")
        for index, entry in enumerate(data)
    )


def load_definitions(path: str | Path) -> tuple[OperationDefinition, ...]:
    """Read operation definitions from a JSON file.

    Raises ``DefinitionError`` if the file is not valid JSON or the
    content has the wrong shape. ``OSError`` from reading propagates.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})"
        raise DefinitionError(msg) from exc

    definitions = definitions_from_data(data)
    _log.debug("Loaded %d operation definitions from %s", len(definitions), path)
    return definitions


def definitions_from_tree(
    tree: Mapping[str, Any] | Sequence[Mapping[str, Any]],
) -> tuple[OperationDefinition, ...]:
    """Flatten one or more ``serialize_tree`` exports into definitions.

    Nodes are emitted parent first. A node shared by several parents
    appears once per parent in the export; repeats are collapsed when
    they agree and raise ``DuplicateKeyError`` when they don't.
    """
    roots = [tree] if isinstance(tree, Mapping) else list(tree)
    seen: dict[str, OperationDefinition] = {}

    def visit(node: Any, where: str) -> None:
        if not isinstance(node, Mapping):
            msg = f"{where}: expected an object, got {type(node).__name__}"
            raise DefinitionError(msg)
        children = node.get("children", ())
        if isinstance(children, (str, bytes)) or not isinstance(children, Sequence):
            msg = f"{where}: 'children' must be a list of objects"
            raise DefinitionError(msg)

        child_keys = []
        for index, child in enumerate(children):
            if not isinstance(child, Mapping):
                msg = f"{where}.children[{index}]: expected an object, got {type(child).__name__}"
                raise DefinitionError(msg)
            child_keys.append(child.get("key"))

        definition = definition_from_mapping(
            {"key": node.get("key"), "urls": node.get("urls", ()), "children": child_keys},
            where=where,
        )
        previous = seen.setdefault(definition.key, definition)
        if previous != definition:
            raise DuplicateKeyError(definition.key)

        for index, child in enumerate(children):
            visit(child, f"{where}.children[{index}]")

    for index, root in enumerate(roots):
        visit(root, f"tree[{index}]")
    return tuple(seen.values())
