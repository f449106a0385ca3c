"""Audit trail for authorization decisions.

``authorize`` reports denials and unknown granted keys here. Nothing is
recorded until a sink is installed with ``set_audit_sink``; the sink
decides where events go (a log file, a queue, an external collector).
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import Any, TypeAlias

_log = logging.getLogger("opscope.audit")


@dataclass(frozen=True, slots=True)
class AuthorizationEvent:
    """One audited decision: what happened, on which path, for which keys."""

    name: str
    path: str
    timestamp: float = field(default_factory=time)
    granted: tuple[str, ...] = ()
    details: dict[str, Any] = field(default_factory=dict)


AuditSink: TypeAlias = Callable[[AuthorizationEvent], None]


_sink_lock = threading.Lock()
_sink: AuditSink | None = None


def set_audit_sink(sink: AuditSink | None) -> None:
    """Install the sink that receives every ``AuthorizationEvent``.

    Replaces any previous sink. ``None`` turns auditing off.
    """
    global _sink
    with _sink_lock:
        _sink = sink


def emit_audit_event(
    name: str,
    *,
    path: str,
    granted: tuple[str, ...] = (),
    details: dict[str, Any] | None = None,
) -> None:
    """Hand an event to the installed sink, if there is one.

    A sink that raises is logged and otherwise ignored; auditing never
    changes the outcome of the decision being audited.
    """
    with _sink_lock:
        sink = _sink
    if sink is None:
        return

    event = AuthorizationEvent(
        name=name,
        path=path,
        granted=granted,
        details=details or {},
    )
    try:
        sink(event)
    except Exception:
        _log.exception("Audit sink failed on %s for %s", name, path)
