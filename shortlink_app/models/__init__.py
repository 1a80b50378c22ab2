"""
In-memory data models for the shortlink service.

Records and click events live in process memory for the lifetime of the
service. There is no persistence layer.
"""

from .url import URLRecord
from .click import ClickEvent

__all__ = ["URLRecord", "ClickEvent"]
