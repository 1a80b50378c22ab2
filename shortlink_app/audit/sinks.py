"""
Audit sink strategies using Strategy Pattern.

A sink delivers one audit event somewhere. Sinks never raise: a failed
delivery is reported as False and the event is dropped.
"""

from abc import ABC, abstractmethod

import requests
from loguru import logger

from .models import AuditEvent


class AuditSink(ABC):
    """Abstract base class for audit sinks"""

    @abstractmethod
    def send(self, event: AuditEvent) -> bool:
        """
        Deliver one event.

        Called from a worker thread, so implementations may block.

        Returns:
            True if the event was accepted, False otherwise
        """
        pass

    def close(self) -> None:
        """Release any resources held by the sink"""
        pass


class HttpAuditSink(AuditSink):
    """
    Remote audit log over HTTP.

    POSTs {"stack", "level", "package", "message"} as JSON to the configured
    endpoint. Failures (connection errors, timeouts, non-2xx responses) are
    logged at debug level and otherwise ignored.
    """

    def __init__(self, url: str, timeout: float = 2.0, session: requests.Session = None):
        """
        Initialize HTTP sink.

        Args:
            url: Remote log endpoint
            timeout: Connect/read timeout in seconds
            session: Optional requests session (one is created if omitted)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, event: AuditEvent) -> bool:
        try:
            response = self.session.post(self.url, json=event.payload(), timeout=self.timeout)
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            logger.debug(f"Audit log delivery failed: {e}")
            return False

    def close(self) -> None:
        self.session.close()


class NullAuditSink(AuditSink):
    """
    Null Object Pattern - sink that discards every event.

    Used when no remote endpoint is configured and in tests.
    """

    def send(self, event: AuditEvent) -> bool:
        """Pretends to deliver but does nothing"""
        return True
