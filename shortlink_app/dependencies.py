"""
FastAPI dependencies for dependency injection.

This module provides the process-wide registry, audit queue and audit
logger. Their lifetime is the lifetime of the process; there is nothing to
flush on shutdown.
"""

from functools import lru_cache

from fastapi import Depends

from shortlink_app.audit.factory import AuditSinkFactory, AuditBackend
from shortlink_app.audit.logger import AuditLogger
from shortlink_app.audit.queue import InMemoryAuditQueue
from shortlink_app.audit.sinks import AuditSink
from shortlink_app.config import settings
from shortlink_app.registry import ShortcodeRegistry


@lru_cache()
def get_registry() -> ShortcodeRegistry:
    """
    Get registry instance (singleton).

    Returns:
        The in-memory ShortcodeRegistry shared by all requests
    """
    return ShortcodeRegistry()


@lru_cache()
def get_audit_queue() -> InMemoryAuditQueue:
    """Get audit queue instance (singleton)"""
    return InMemoryAuditQueue()


@lru_cache()
def get_audit_sink() -> AuditSink:
    """
    Get audit sink instance (singleton).

    Factory gets config from settings internally.
    """
    backend = AuditBackend(settings.audit_backend)
    return AuditSinkFactory.create(backend)


def get_audit_logger(
    queue: InMemoryAuditQueue = Depends(get_audit_queue)
) -> AuditLogger:
    """Get AuditLogger publishing onto the shared audit queue"""
    return AuditLogger(
        queue=queue,
        queue_name=settings.audit_queue_name,
        stack=settings.audit_stack
    )


def get_url_service(
    registry: ShortcodeRegistry = Depends(get_registry),
    audit: AuditLogger = Depends(get_audit_logger)
):
    """
    Get URLService with all dependencies injected.

    Controllers depend on the service; the service depends on the registry
    and the audit logger.
    """
    from shortlink_app.services.url_service import URLService
    return URLService(registry=registry, audit=audit)
