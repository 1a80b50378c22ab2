"""
Short code generation strategies for the shortlink service.
Uses Strategy Pattern to allow different generation algorithms.

Strategies are called by the registry while it holds its lock, with an
`exists` predicate that checks the live keyspace. A candidate is only
returned once the predicate reports it free.
"""

import random
import string
from abc import ABC, abstractmethod
from typing import Callable


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, exists: Callable[[str], bool]) -> str:
        """
        Generate a short code.

        Args:
            exists: Returns True if a candidate already keys a record

        Returns:
            A short code string not currently in use
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random generation strategy.
    Draws independent uniform characters from the 62-symbol alphabet and
    retries on collision.

    Pros: Simple, unpredictable, 62^6 ≈ 56.8 billion codes at length 6
    Cons: Needs an existence check per attempt
    """

    def __init__(self, length: int = 6):
        self.length = length
        self.characters = string.ascii_letters + string.digits

    def generate(self, exists: Callable[[str], bool]) -> str:
        """Generate random short code, retrying until a free one is found"""
        while True:
            short_code = self._generate_random_string()
            if not exists(short_code):
                return short_code

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(random.choice(self.characters) for _ in range(self.length))
