"""Authorization decisions over an operation catalog.

The catalog only answers structural questions; this module is the
decision an authorization filter makes with those answers. A request is
allowed iff at least one granted operation's subtree matches the path.
Unknown granted keys never grant access.

Usage::

    from opscope.authz import Authorizer
    from opscope.definitions import default_catalog

    authorizer = Authorizer(default_catalog())
    decision = authorizer.check("/v1/analytics/dashboards/7", user.permissions)
    if not decision:
        return forbidden()

    # Or raise instead:
    authorizer.require(request.path, user.permissions)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from opscope.audit import emit_audit_event
from opscope.catalog import OperationCatalog
from opscope.errors import AccessDenied, UnknownOperationError

_log = logging.getLogger("opscope.authz")


@dataclass(frozen=True, slots=True)
class AuthorizationDecision:
    """Outcome of checking a path against a set of granted operation keys.

    Truthy when access is allowed.
    """

    allowed: bool
    path: str
    matched: tuple[str, ...] = ()
    unknown: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.allowed


def authorize(
    catalog: OperationCatalog,
    path: str,
    granted: Iterable[str],
) -> AuthorizationDecision:
    """Decide whether *granted* covers *path*.

    Every granted key is evaluated (no short-circuit) so the decision
    reports all matching and all unknown keys. Keys are de-duplicated,
    first occurrence kept. A single key passed as a plain string is treated
    as one grant.
    """
    if isinstance(granted, str):
        granted = (granted,)
    keys = tuple(dict.fromkeys(granted))
    matched: list[str] = []
    unknown: list[str] = []

    for key in keys:
        try:
            operation = catalog.lookup(key)
        except UnknownOperationError:
            unknown.append(key)
            continue
        if operation.matches_url_recursive(path):
            matched.append(key)

    if unknown:
        _log.warning("Ignoring unknown granted operations: %s", ", ".join(unknown))
        emit_audit_event(
            "authz.operation.unknown",
            path=path,
            granted=keys,
            details={"unknown": list(unknown)},
        )

    decision = AuthorizationDecision(
        allowed=bool(matched),
        path=path,
        matched=tuple(matched),
        unknown=tuple(unknown),
    )
    if not decision.allowed:
        _log.debug("Denied %s for granted operations: %s", path, ", ".join(keys) or "<none>")
        emit_audit_event("authz.operation.denied", path=path, granted=keys)
    return decision


class Authorizer:
    """Binds a catalog for repeated decisions. Stateless, thread-safe."""

    __slots__ = ("_catalog",)

    def __init__(self, catalog: OperationCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> OperationCatalog:
        return self._catalog

    def check(self, path: str, granted: Iterable[str]) -> AuthorizationDecision:
        return authorize(self._catalog, path, granted)

    def require(self, path: str, granted: Iterable[str]) -> AuthorizationDecision:
        """Like ``check``, but raise ``AccessDenied`` when denied."""
        decision = self.check(path, granted)
        if not decision.allowed:
            raise AccessDenied(path)
        return decision
