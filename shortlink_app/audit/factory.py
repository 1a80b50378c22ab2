"""
Factory for creating audit sink instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum

from loguru import logger

from .sinks import AuditSink, HttpAuditSink, NullAuditSink
from shortlink_app.config import settings


class AuditBackend(Enum):
    """Available audit sink backends"""
    HTTP = "http"
    NULL = "null"


class AuditSinkFactory:
    """
    Simple factory for creating audit sink instances.

    Gets configuration from settings (not passed as parameters).
    """

    _instance: AuditSink = None  # Single cached instance

    @classmethod
    def create(cls, backend: AuditBackend) -> AuditSink:
        """
        Create or return cached audit sink instance.

        Args:
            backend: Type of sink backend (from enum)

        Returns:
            Singleton sink instance
        """
        if cls._instance is not None:
            return cls._instance

        if backend == AuditBackend.HTTP:
            if settings.audit_log_url:
                cls._instance = HttpAuditSink(
                    url=settings.audit_log_url,
                    timeout=settings.audit_timeout_seconds
                )
                logger.info(f"HTTP audit sink initialized ({settings.audit_log_url})")
            else:
                logger.warning("No audit_log_url configured, falling back to null audit sink")
                cls._instance = NullAuditSink()

        elif backend == AuditBackend.NULL:
            cls._instance = NullAuditSink()
            logger.info("Null audit sink initialized")

        else:
            raise ValueError(f"Unknown audit backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
