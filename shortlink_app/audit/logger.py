"""
Audit logger: the fire-and-forget entry point used by the service layer,
the request middleware and the error handler.
"""

from loguru import logger

from .models import AuditEvent
from .queue import InMemoryAuditQueue

# Audit levels mapped onto loguru levels for the local copy of each event
_LOCAL_LEVELS = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "error": "ERROR",
    "fatal": "CRITICAL",
}


class AuditLogger:
    """
    Publishes audit events without waiting for delivery.

    Each event is written to the local log and queued for the background
    worker. log() never raises, so a broken audit path cannot fail or delay
    the operation being audited.
    """

    def __init__(self, queue: InMemoryAuditQueue, queue_name: str, stack: str = "backend"):
        self.queue = queue
        self.queue_name = queue_name
        self.stack = stack

    async def log(self, level: str, package: str, message: str) -> bool:
        """
        Record one audit event.

        Args:
            level: debug, info, warn, error or fatal
            package: Component tag (handler, service, middleware)
            message: Human-readable description

        Returns:
            True if the event was queued
        """
        try:
            event = AuditEvent(stack=self.stack, level=level, package=package, message=message)
            logger.bind(package=package).log(_LOCAL_LEVELS[event.level], message)
            return await self.queue.publish(self.queue_name, event)
        except Exception as e:
            logger.debug(f"Dropping audit event ({level}/{package}): {e}")
            return False
