"""Catalog configuration.

CatalogConfig is a frozen dataclass — immutable after creation, shared by
every query against the catalog it was built with.
"""

from dataclasses import dataclass

from opscope.errors import CatalogError


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Catalog configuration. Immutable after creation.

    The defaults describe the ``/v1/admin/analytics/dashboards/**`` pattern
    style and the ``.admin`` / ``.user`` key conventions::

        config = CatalogConfig(admin_suffix=".manage")
    """

    # URL patterns
    wildcard: str = "**"  # Trailing marker meaning "this prefix and anything beneath it"

    # Keys
    separator: str = "."
    admin_suffix: str = ".admin"
    user_suffix: str = ".user"

    def __post_init__(self) -> None:
        if not self.wildcard:
            msg = "wildcard marker must be a non-empty string"
            raise CatalogError(msg)
        if not self.separator:
            msg = "key separator must be a non-empty string"
            raise CatalogError(msg)
