"""
Audit Worker

Drains audit events from the in-memory queue and hands them to the
configured sink. Runs as a background asyncio task for the lifetime of the
app.

Architecture:
- Consumes messages from queue in batches
- Delivers each event in a worker thread (sinks may block on the network)
- Drops events whose delivery fails; nothing is retried
"""

import asyncio
from typing import Optional

from loguru import logger

from .queue import InMemoryAuditQueue
from .sinks import AuditSink


class AuditWorker:
    """
    Background audit delivery.

    Features:
    - Batch consumption
    - Sink strategy pattern
    - Failures are logged and discarded
    """

    def __init__(
        self,
        queue: InMemoryAuditQueue,
        sink: AuditSink,
        queue_name: str,
        batch_size: int = 50,
        poll_interval: float = 0.5,
        shutdown_batches: int = 1
    ):
        """
        Initialize worker with dependencies.

        Args:
            queue: Queue to consume events from
            sink: Where events are delivered
            queue_name: Name of the audit queue
            batch_size: Maximum events taken per batch
            poll_interval: Seconds to sleep when the queue is empty
            shutdown_batches: Batches still delivered after stop(); the
                              rest of the backlog is left undelivered
        """
        self.queue = queue
        self.sink = sink
        self.queue_name = queue_name
        self.batch_size = batch_size
        self.poll_interval = poll_interval
        self.shutdown_batches = shutdown_batches
        self.running = False
        self.delivered_count = 0
        self.failed_count = 0

    async def start(self):
        """Run until stop() is called, then flush up to shutdown_batches batches"""
        self.running = True
        logger.info(f"Audit worker started (batch size {self.batch_size})")

        while self.running:
            try:
                processed = await self.process_batch()
                if not processed:
                    await asyncio.sleep(self.poll_interval)
            except asyncio.CancelledError:
                logger.info("Audit worker task cancelled")
                raise
            except Exception as e:
                logger.error(f"Audit worker error: {e}")
                await asyncio.sleep(self.poll_interval)

        await self.drain(max_batches=self.shutdown_batches)
        remaining = await self.queue.get_queue_length(self.queue_name)
        if remaining:
            logger.warning(f"Audit worker left {remaining} events undelivered at shutdown")
        logger.info("Audit worker stopped")

    async def process_batch(self) -> int:
        """
        Deliver one batch of events.

        Returns:
            Number of events taken off the queue
        """
        events = await self.queue.consume(self.queue_name, batch_size=self.batch_size)

        for event in events:
            try:
                delivered = await asyncio.to_thread(self.sink.send, event)
            except Exception as e:
                logger.debug(f"Audit sink raised: {e}")
                delivered = False

            if delivered:
                self.delivered_count += 1
            else:
                self.failed_count += 1

        return len(events)

    async def drain(self, max_batches: Optional[int] = None):
        """Deliver queued events, at most max_batches batches when given"""
        batches = 0
        while max_batches is None or batches < max_batches:
            if not await self.process_batch():
                break
            batches += 1

    def stop(self):
        """Stop the worker"""
        self.running = False
