"""Opscope exception hierarchy.

Construction errors are fatal: a process must not start with an
ambiguous permission namespace. ``UnknownOperationError`` is the only
query-time error and callers treat it as "no permission".
"""


class OpscopeError(Exception):
    """Base for all opscope-specific errors."""


class CatalogError(OpscopeError):
    """Raised when an operation catalog cannot be built."""


class DuplicateKeyError(CatalogError):
    """Two operation definitions share a key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate operation key: {key!r}")


class CyclicReferenceError(CatalogError):
    """The child reference graph contains a cycle.

    ``cycle`` lists the keys along the cycle, first key repeated at the end.
    """

    def __init__(self, cycle: tuple[str, ...]) -> None:
        self.cycle = cycle
        super().__init__(f"Cyclic operation reference: {' -> '.join(cycle)}")


class UndefinedReferenceError(CatalogError):
    """An operation lists a child key that has no definition."""

    def __init__(self, parent: str, child: str) -> None:
        self.parent = parent
        self.child = child
        super().__init__(f"Operation {parent!r} references undefined child {child!r}")


class DefinitionError(CatalogError):
    """A definition entry is malformed (wrong shape or types)."""


class UnknownOperationError(OpscopeError, KeyError):
    """No operation with this key exists in the catalog."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Unknown operation: {self.key!r}"


class AccessDenied(OpscopeError):  # noqa: N818 — reads as an outcome, not a fault
    """The granted permissions do not cover the request path."""

    def __init__(self, path: str, detail: str = "Forbidden") -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"{detail}: {path}")
