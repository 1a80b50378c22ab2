"""Middleware for the shortlink app."""

from .audit import AuditMiddleware

__all__ = ["AuditMiddleware"]
