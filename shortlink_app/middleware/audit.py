"""Request audit middleware."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortlink_app.audit.logger import AuditLogger


class AuditMiddleware(BaseHTTPMiddleware):
    """Audits every inbound request before it is handled."""

    def __init__(self, app, audit_factory: Callable[[], AuditLogger]):
        """
        Args:
            audit_factory: Returns the AuditLogger to publish to; looked up
                           per request so dependency overrides apply
        """
        super().__init__(app)
        self.audit_factory = audit_factory

    async def dispatch(self, request: Request, call_next: Callable):
        client_ip = request.client.host if request.client else "unknown"
        await self.audit_factory().log(
            "info",
            "middleware",
            f"{request.method} {request.url.path} from {client_ip}"
        )
        return await call_next(request)
