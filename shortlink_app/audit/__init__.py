"""
Audit log module.

Best-effort remote audit logging: events are queued in memory and delivered
by a background worker through a pluggable sink. Failures never reach the
code that emitted the event.
"""

from .models import AuditEvent
from .queue import InMemoryAuditQueue
from .sinks import AuditSink, HttpAuditSink, NullAuditSink
from .factory import AuditSinkFactory, AuditBackend
from .logger import AuditLogger
from .worker import AuditWorker

__all__ = [
    "AuditEvent",
    "InMemoryAuditQueue",
    "AuditSink",
    "HttpAuditSink",
    "NullAuditSink",
    "AuditSinkFactory",
    "AuditBackend",
    "AuditLogger",
    "AuditWorker",
]
