"""Operation catalog — the compiled, immutable permission forest.

Definitions are compiled once into ``Operation`` nodes; every query after
that is a pure, lock-free traversal of the frozen structure.

Usage::

    catalog = OperationCatalog(DEFINITIONS)
    catalog.matches_recursive("analytics.dashboard", "/v1/admin/analytics/dashboards/1")
    catalog.effective_urls("analytics.dashboard")
    catalog.admin_operations()
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, TypeAlias

from opscope.config import CatalogConfig
from opscope.errors import (
    CyclicReferenceError,
    DefinitionError,
    DuplicateKeyError,
    UndefinedReferenceError,
    UnknownOperationError,
)
from opscope.loader import definitions_from_data, definitions_from_tree
from opscope.operation import Operation, OperationDefinition, OperationType
from opscope.patterns import compile_pattern

_log = logging.getLogger("opscope.catalog")

OperationRef: TypeAlias = Operation | str


def _dedupe(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


class _Builder:
    """Compiles definitions into nodes. Used once per catalog, then dropped."""

    __slots__ = ("_built", "_config", "_definitions")

    def __init__(self, definitions: Iterable[OperationDefinition], config: CatalogConfig) -> None:
        self._config = config
        self._definitions: dict[str, OperationDefinition] = {}
        self._built: dict[str, Operation] = {}

        for definition in definitions:
            self._check_key(definition.key)
            self._check_strings(definition.key, "urls", definition.urls)
            self._check_strings(definition.key, "children", definition.children)
            if definition.key in self._definitions:
                raise DuplicateKeyError(definition.key)
            self._definitions[definition.key] = definition

        for definition in self._definitions.values():
            for child in definition.children:
                if child not in self._definitions:
                    raise UndefinedReferenceError(definition.key, child)

    def _check_key(self, key: object) -> None:
        if not isinstance(key, str) or not key:
            msg = f"Operation key must be a non-empty string, got {key!r}"
            raise DefinitionError(msg)
        if "" in key.split(self._config.separator):
            msg = f"Operation key {key!r} has an empty segment"
            raise DefinitionError(msg)

    @staticmethod
    def _check_strings(key: str, field_name: str, values: object) -> None:
        if isinstance(values, str) or not isinstance(values, Sequence):
            kind = type(values).__name__
            msg = f"Operation {key!r}: {field_name!r} must be a tuple of strings, got {kind}"
            raise DefinitionError(msg)
        for value in values:
            if not isinstance(value, str):
                msg = f"Operation {key!r}: {field_name!r} must contain only strings, got {value!r}"
                raise DefinitionError(msg)

    def build(self) -> dict[str, Operation]:
        """Return every node keyed by key, in declaration order."""
        for key in self._definitions:
            self._build(key, ())
        return {key: self._built[key] for key in self._definitions}

    def _build(self, key: str, path: tuple[str, ...]) -> Operation:
        built = self._built.get(key)
        if built is not None:
            return built
        if key in path:
            cycle = (*path[path.index(key) :], key)
            raise CyclicReferenceError(cycle)

        definition = self._definitions[key]
        urls = _dedupe(definition.urls)
        try:
            prefixes = tuple(compile_pattern(url, self._config.wildcard) for url in urls)
        except ValueError as exc:
            msg = f"Operation {key!r}: {exc}"
            raise DefinitionError(msg) from exc

        children = tuple(self._build(child, (*path, key)) for child in _dedupe(definition.children))
        operation = Operation(key=key, urls=urls, children=children, prefixes=prefixes)
        self._built[key] = operation
        return operation


class OperationCatalog:
    """Immutable forest of operations with lookup, matching and structural queries.

    Every method taking a node accepts the ``Operation`` itself or its key.
    Unknown keys raise ``UnknownOperationError``, which callers deciding
    access must treat as a denial.
    """

    __slots__ = ("_config", "_effective", "_operations", "_parents", "_roots")

    def __init__(
        self,
        definitions: Iterable[OperationDefinition],
        config: CatalogConfig | None = None,
    ) -> None:
        self._config = config or CatalogConfig()
        self._operations = _Builder(definitions, self._config).build()

        parents: dict[str, list[Operation]] = {key: [] for key in self._operations}
        for operation in self._operations.values():
            for child in operation.children:
                parents[child.key].append(operation)
        self._parents = {key: tuple(ops) for key, ops in parents.items()}
        self._roots = tuple(op for op in self._operations.values() if not self._parents[op.key])

        self._effective: dict[str, tuple[str, ...]] = {}
        for operation in self._operations.values():
            self._compute_effective(operation)

        _log.debug(
            "Built operation catalog: %d operations, %d modules",
            len(self._operations),
            len(self._roots),
        )

    @classmethod
    def from_data(cls, data: Any, config: CatalogConfig | None = None) -> "OperationCatalog":
        """Build from a list of ``{"key", "urls", "children"}`` mappings."""
        return cls(definitions_from_data(data), config)

    @classmethod
    def from_tree(
        cls,
        tree: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        config: CatalogConfig | None = None,
    ) -> "OperationCatalog":
        """Rebuild a catalog from one or more ``serialize_tree`` exports."""
        return cls(definitions_from_tree(tree), config)

    def _compute_effective(self, operation: Operation) -> tuple[str, ...]:
        cached = self._effective.get(operation.key)
        if cached is not None:
            return cached
        urls = list(operation.urls)
        for child in operation.children:
            urls.extend(self._compute_effective(child))
        result = _dedupe(urls)
        self._effective[operation.key] = result
        return result

    # -- Lookup ---------------------------------------------------------------

    @property
    def config(self) -> CatalogConfig:
        return self._config

    def lookup(self, key: str) -> Operation:
        """Return the operation for *key*.

        Raises ``UnknownOperationError`` if no such key exists.
        """
        try:
            return self._operations[key]
        except KeyError:
            raise UnknownOperationError(key) from None

    def _resolve(self, node: OperationRef) -> Operation:
        return self.lookup(node if isinstance(node, str) else node.key)

    def __getitem__(self, key: str) -> Operation:
        return self.lookup(key)

    def __contains__(self, key: object) -> bool:
        return key in self._operations

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)

    def keys(self) -> tuple[str, ...]:
        """All operation keys, declaration order."""
        return tuple(self._operations)

    # -- Matching -------------------------------------------------------------

    def matches_direct(self, node: OperationRef, path: str) -> bool:
        """True if *path* starts with one of the node's own URL prefixes."""
        return self._resolve(node).matches_url(path)

    def matches_recursive(self, node: OperationRef, path: str) -> bool:
        """True if *path* matches the node or any of its descendants."""
        return self._resolve(node).matches_url_recursive(path)

    def matching(self, path: str) -> tuple[Operation, ...]:
        """Every operation whose own URLs match *path*, declaration order."""
        return tuple(op for op in self._operations.values() if op.matches_url(path))

    def effective_urls(self, node: OperationRef) -> tuple[str, ...]:
        """Own URLs followed by each child's effective URLs, deduplicated.

        The first occurrence of a URL wins; children are visited in
        declaration order.
        """
        return self._effective[self._resolve(node).key]

    # -- Structure ------------------------------------------------------------

    def modules(self) -> tuple[Operation, ...]:
        """Root operations (referenced by no parent), declaration order."""
        return self._roots

    def children(self, node: OperationRef) -> tuple[Operation, ...]:
        return self._resolve(node).children

    def features(self, module: OperationRef) -> tuple[Operation, ...]:
        return self.children(module)

    def operations(self, feature: OperationRef) -> tuple[Operation, ...]:
        return self.children(feature)

    def parents(self, node: OperationRef) -> tuple[Operation, ...]:
        """Operations listing *node* as a direct child, declaration order."""
        return self._parents[self._resolve(node).key]

    def ancestors(self, node: OperationRef) -> tuple[Operation, ...]:
        """Every transitive parent, nearest first, each listed once."""
        seen: dict[str, Operation] = {}
        frontier = list(self.parents(node))
        while frontier:
            next_frontier: list[Operation] = []
            for parent in frontier:
                if parent.key in seen:
                    continue
                seen[parent.key] = parent
                next_frontier.extend(self._parents[parent.key])
            frontier = next_frontier
        return tuple(seen.values())

    def descendants(self, node: OperationRef) -> tuple[Operation, ...]:
        """Every transitive child, pre-order, each listed once."""
        root = self._resolve(node)
        seen: dict[str, Operation] = {}
        for operation in root.walk():
            if operation is not root:
                seen.setdefault(operation.key, operation)
        return tuple(seen.values())

    def type_of(self, node: OperationRef) -> OperationType:
        """Classify by position: root composite, inner composite, or leaf."""
        operation = self._resolve(node)
        if operation.is_leaf:
            return OperationType.PERMISSION
        if not self._parents[operation.key]:
            return OperationType.MODULE
        return OperationType.FEATURE

    # -- Naming conventions ---------------------------------------------------

    def find_by_suffix(self, suffix: str) -> tuple[Operation, ...]:
        """Every operation whose key ends with *suffix*, declaration order."""
        return tuple(op for op in self._operations.values() if op.key.endswith(suffix))

    def admin_operations(self) -> tuple[Operation, ...]:
        return self.find_by_suffix(self._config.admin_suffix)

    def user_operations(self) -> tuple[Operation, ...]:
        return self.find_by_suffix(self._config.user_suffix)

    # -- Export ---------------------------------------------------------------

    def serialize_tree(self, node: OperationRef) -> dict[str, Any]:
        """Export ``{"key", "urls", "children"}`` recursively as plain data."""
        operation = self._resolve(node)
        return {
            "key": operation.key,
            "urls": list(operation.urls),
            "children": [self.serialize_tree(child) for child in operation.children],
        }

    def serialize(self) -> list[dict[str, Any]]:
        """Export the whole forest, one tree per module."""
        return [self.serialize_tree(root) for root in self._roots]

    def __repr__(self) -> str:
        return f"<OperationCatalog operations={len(self._operations)} modules={len(self._roots)}>"
