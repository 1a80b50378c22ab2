"""
Data models for audit events.
"""

from datetime import datetime, timezone
from typing import Dict, Literal

from pydantic import BaseModel, Field

AuditLevel = Literal["debug", "info", "warn", "error", "fatal"]
AuditPackage = Literal["handler", "service", "middleware"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    One line for the remote audit log.

    Published after every registry operation (success or failure) and for
    every inbound request. Delivery is best-effort.
    """

    stack: str = Field("backend", description="Which stack emitted the event")
    level: AuditLevel = Field(..., description="Severity")
    package: AuditPackage = Field(..., description="Component that emitted the event")
    message: str = Field(..., description="Human-readable description")
    timestamp: datetime = Field(default_factory=_utcnow, description="When the event was emitted")

    def payload(self) -> Dict[str, str]:
        """Body expected by the remote log endpoint"""
        return self.model_dump(include={"stack", "level", "package", "message"})
