"""
In-memory queue for audit events.

Publishing only appends to a deque, so callers never wait on the remote
sink. The worker drains the queue in the background.
"""

from collections import deque
from typing import Deque, Dict, List

from loguru import logger

from .models import AuditEvent


class InMemoryAuditQueue:
    """
    In-memory queue implementation using Python deque.

    Pros:
    - No external dependencies
    - Publishing never blocks

    Cons:
    - Not persistent (pending events are lost on restart)
    - One queue per process
    """

    def __init__(self, maxlen: int = 10000):
        """
        Initialize in-memory queues.

        Args:
            maxlen: Oldest events are dropped once a queue holds this many
        """
        self.maxlen = maxlen
        self._queues: Dict[str, Deque[AuditEvent]] = {}

    def _get_queue(self, queue_name: str) -> Deque[AuditEvent]:
        """Get or create queue"""
        if queue_name not in self._queues:
            self._queues[queue_name] = deque(maxlen=self.maxlen)
        return self._queues[queue_name]

    async def publish(self, queue_name: str, message: AuditEvent) -> bool:
        """Add message to in-memory queue"""
        try:
            self._get_queue(queue_name).append(message)
            return True
        except Exception as e:
            logger.warning(f"Audit publish error: {e}")
            return False

    async def consume(self, queue_name: str, batch_size: int = 1) -> List[AuditEvent]:
        """Take up to batch_size messages off the front of the queue"""
        queue = self._get_queue(queue_name)
        messages = []

        while queue and len(messages) < batch_size:
            messages.append(queue.popleft())

        return messages

    async def get_queue_length(self, queue_name: str) -> int:
        """Get queue length"""
        return len(self._get_queue(queue_name))
