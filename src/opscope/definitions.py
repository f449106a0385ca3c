"""Built-in operation definitions and the process-wide default catalog.

The table is configuration-as-code: edit it, restart the process. The
default catalog is compiled on first access, at most once, and shared
read-only afterwards.
"""

import threading

from opscope.catalog import OperationCatalog
from opscope.operation import OperationDefinition

ANALYTICS = "analytics"
DASHBOARD = "analytics.dashboard"
DASHBOARD_ADMIN = "analytics.dashboard.admin"
DASHBOARD_USER = "analytics.dashboard.user"
DATASOURCE = "analytics.datasource"
DATASOURCE_ADMIN = "analytics.datasource.admin"
DATASOURCE_USER = "analytics.datasource.user"


DEFINITIONS: tuple[OperationDefinition, ...] = (
    # Dashboards ---------------------------------------------------------
    OperationDefinition(
        DASHBOARD_USER,
        urls=("/v1/analytics/dashboards/**",),
    ),
    OperationDefinition(
        DASHBOARD_ADMIN,
        urls=("/v1/admin/analytics/dashboards/**",),
        children=(DASHBOARD_USER,),
    ),
    OperationDefinition(
        DASHBOARD,
        children=(DASHBOARD_USER, DASHBOARD_ADMIN),
    ),
    # Data sources -------------------------------------------------------
    OperationDefinition(
        DATASOURCE_USER,
        urls=("/v1/analytics/datasource/**",),
    ),
    OperationDefinition(
        DATASOURCE_ADMIN,
        urls=("/v1/admin/analytics/datasource/**",),
        children=(DATASOURCE_USER,),
    ),
    OperationDefinition(
        DATASOURCE,
        children=(DATASOURCE_USER, DATASOURCE_ADMIN),
    ),
    # Modules ------------------------------------------------------------
    OperationDefinition(
        ANALYTICS,
        children=(DASHBOARD, DATASOURCE),
    ),
)


_catalog_lock = threading.Lock()
_catalog: OperationCatalog | None = None


def default_catalog() -> OperationCatalog:
    """Return the shared catalog built from ``DEFINITIONS``.

    Construction errors propagate to the first caller and are retried
    by the next one; a broken table never yields a partial catalog.
    """
    global _catalog
    catalog = _catalog
    if catalog is not None:
        return catalog
    with _catalog_lock:
        if _catalog is None:
            _catalog = OperationCatalog(DEFINITIONS)
        return _catalog
