"""Operation nodes and definitions.

``OperationDefinition`` is the declarative input (children named by key);
``Operation`` is the compiled, immutable node the catalog hands out
(children held by reference). Nodes are normally created by the catalog
builder; a node built by hand compiles its URLs with the default wildcard.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from opscope.patterns import UrlPrefix, compile_pattern


class OperationType(Enum):
    """Position of an operation in the forest."""

    MODULE = "module"  # Root grouping, contains features
    FEATURE = "feature"  # Mid-level grouping, contains permissions
    PERMISSION = "permission"  # Leaf, the actual permission


@dataclass(frozen=True, slots=True)
class OperationDefinition:
    """A declarative operation entry.

    ``children`` names other definitions by key. Order is significant
    for both ``urls`` and ``children``::

        OperationDefinition(
            "analytics.dashboard.admin",
            urls=("/v1/admin/analytics/dashboards/**",),
            children=("analytics.dashboard.user",),
        )
    """

    key: str
    urls: tuple[str, ...] = ()
    children: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, eq=False)
class Operation:
    """A compiled operation node. Immutable, identity by key.

    A node may be the child of several parents; the catalog owns every
    node and parents only reference them.
    """

    key: str
    urls: tuple[str, ...] = ()
    children: tuple["Operation", ...] = field(default=(), repr=False)
    prefixes: tuple[UrlPrefix, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.urls, str):
            msg = f"Operation {self.key!r}: urls must be a tuple of strings, not a str"
            raise TypeError(msg)
        if self.urls and not self.prefixes:
            object.__setattr__(self, "prefixes", tuple(compile_pattern(url) for url in self.urls))

    @property
    def is_composite(self) -> bool:
        return bool(self.children)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def matches_url(self, path: str) -> bool:
        """True if *path* falls under one of this node's own URLs."""
        return any(prefix.matches(path) for prefix in self.prefixes)

    def matches_url_recursive(self, path: str) -> bool:
        """True if *path* falls under this node or any descendant.

        Children are tried in declaration order; the first hit wins.
        """
        if self.matches_url(path):
            return True
        return any(child.matches_url_recursive(path) for child in self.children)

    def walk(self) -> Iterator["Operation"]:
        """Yield this node and its descendants, pre-order.

        Shared descendants are yielded once per path that reaches them.
        """
        yield self
        for child in self.children:
            yield from child.walk()
