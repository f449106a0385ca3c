"""Opscope — hierarchical operation permissions for URL-based access control.

A static, immutable forest of named operations. Each operation owns URL
path prefixes; composite operations cover everything their descendants
cover.

Basic usage::

    from opscope import Authorizer, default_catalog

    catalog = default_catalog()
    catalog.matches_recursive("analytics.dashboard", "/v1/admin/analytics/dashboards/1")
    catalog.effective_urls("analytics.dashboard")

    authorizer = Authorizer(catalog)
    if authorizer.check(request.path, user.permissions):
        ...

Custom definitions::

    from opscope import OperationCatalog, OperationDefinition

    catalog = OperationCatalog([
        OperationDefinition("reports.user", urls=("/v1/reports/**",)),
        OperationDefinition("reports", children=("reports.user",)),
    ])
"""

__version__ = "0.1.0"
__all__ = [
    "AccessDenied",
    "AuthorizationDecision",
    "Authorizer",
    "CatalogConfig",
    "CatalogError",
    "CyclicReferenceError",
    "DefinitionError",
    "DuplicateKeyError",
    "Operation",
    "OperationCatalog",
    "OperationDefinition",
    "OperationType",
    "OpscopeError",
    "UndefinedReferenceError",
    "UnknownOperationError",
    "authorize",
    "default_catalog",
    "load_definitions",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "AccessDenied": "opscope.errors",
    "AuthorizationDecision": "opscope.authz",
    "Authorizer": "opscope.authz",
    "CatalogConfig": "opscope.config",
    "CatalogError": "opscope.errors",
    "CyclicReferenceError": "opscope.errors",
    "DefinitionError": "opscope.errors",
    "DuplicateKeyError": "opscope.errors",
    "Operation": "opscope.operation",
    "OperationCatalog": "opscope.catalog",
    "OperationDefinition": "opscope.operation",
    "OperationType": "opscope.operation",
    "OpscopeError": "opscope.errors",
    "UndefinedReferenceError": "opscope.errors",
    "UnknownOperationError": "opscope.errors",
    "authorize": "opscope.authz",
    "default_catalog": "opscope.definitions",
    "load_definitions": "opscope.loader",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import opscope`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
