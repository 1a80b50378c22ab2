"""
Tests for the URL service: registry calls plus audit dispatch.
"""

import asyncio

import pytest

from shortlink_app.audit.logger import AuditLogger
from shortlink_app.audit.queue import InMemoryAuditQueue
from shortlink_app.config import settings
from shortlink_app.exceptions import (
    ExpiredError,
    InvalidShortcodeError,
    InvalidUrlError,
    NotFoundError,
    ShortcodeConflictError,
)
from shortlink_app.services.url_service import URLService


def queued(audit_queue):
    return asyncio.run(audit_queue.consume(settings.audit_queue_name, batch_size=100))


class BrokenQueue(InMemoryAuditQueue):
    async def publish(self, queue_name, message):
        raise RuntimeError("audit backend exploded")


class TestURLService:
    """Test URL service business logic directly"""

    def test_create_is_audited(self, url_service, audit_queue):
        record = asyncio.run(url_service.create_short_url("https://www.example.com/"))

        events = queued(audit_queue)
        assert [(e.level, e.package) for e in events] == [("info", "service")]
        assert events[0].message == f"shortcode created: {record.shortcode}"

    def test_invalid_input_is_audited_as_error(self, url_service, audit_queue):
        with pytest.raises(InvalidUrlError):
            asyncio.run(url_service.create_short_url("not-a-url"))
        with pytest.raises(InvalidShortcodeError):
            asyncio.run(url_service.create_short_url("https://example.com/", "abc"))

        assert [e.level for e in queued(audit_queue)] == ["error", "error"]

    def test_conflict_is_audited_as_warning(self, url_service, audit_queue):
        asyncio.run(url_service.create_short_url("https://example.com/", "dupe1"))
        with pytest.raises(ShortcodeConflictError):
            asyncio.run(url_service.create_short_url("https://example.com/", "dupe1"))

        assert [e.level for e in queued(audit_queue)] == ["info", "warn"]

    def test_resolve(self, url_service, audit_queue):
        asyncio.run(url_service.create_short_url("https://www.github.com/", "gh1234"))

        url = asyncio.run(url_service.resolve("gh1234", referrer="https://a.example/", origin="1.1.1.1"))

        assert url == "https://www.github.com/"
        assert queued(audit_queue)[-1].message == "redirect for shortcode: gh1234"

    def test_resolve_failures_are_audited(self, url_service, audit_queue, clock):
        asyncio.run(url_service.create_short_url("https://example.com/", "short1", 1))
        clock.advance(minutes=2)

        with pytest.raises(NotFoundError):
            asyncio.run(url_service.resolve("missing1"))
        with pytest.raises(ExpiredError):
            asyncio.run(url_service.resolve("short1"))

        events = queued(audit_queue)[1:]
        assert [e.level for e in events] == ["warn", "warn"]
        assert events[1].message == "expired shortcode: short1"

    def test_stats(self, url_service, audit_queue):
        asyncio.run(url_service.create_short_url("https://example.com/", "stat12"))
        asyncio.run(url_service.resolve("stat12", origin="1.1.1.1"))

        stats = asyncio.run(url_service.get_url_stats("stat12"))

        assert stats.total_clicks == 1
        assert stats.click_details[0].origin == "1.1.1.1"
        with pytest.raises(NotFoundError):
            asyncio.run(url_service.get_url_stats("missing1"))
        assert queued(audit_queue)[-1].level == "error"

    def test_summary(self, url_service):
        asyncio.run(url_service.create_short_url("https://example.com/", "summ12"))
        asyncio.run(url_service.resolve("summ12", referrer="https://a.example/"))

        summary = asyncio.run(url_service.get_url_summary("summ12", days=1))

        assert summary.total_clicks == 1
        assert summary.top_referrers[0].referrer == "https://a.example/"
        assert summary.clicks_by_day[0].clicks == 1

    def test_audit_failure_never_fails_the_operation(self, registry):
        audit = AuditLogger(queue=BrokenQueue(), queue_name=settings.audit_queue_name)
        service = URLService(registry=registry, audit=audit)

        record = asyncio.run(service.create_short_url("https://example.com/"))
        url = asyncio.run(service.resolve(record.shortcode))

        assert url == "https://example.com/"
        assert registry.stats(record.shortcode).total_clicks == 1

    def test_service_without_audit(self, registry):
        service = URLService(registry=registry)

        record = asyncio.run(service.create_short_url("https://example.com/"))

        assert asyncio.run(service.resolve(record.shortcode)) == "https://example.com/"
