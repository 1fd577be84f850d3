"""
Identifier generation strategies.
Uses Strategy Pattern so short links and QR ids share one interface.
"""

import random
import string
import uuid
from abc import ABC, abstractmethod

# One process-wide source, seeded once from the OS. SystemRandom keeps no
# Python-level state, so concurrent requests can share it without locking.
_system_random = random.SystemRandom()


class IdentifierStrategy(ABC):
    """Abstract base class for identifier generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a new identifier.

        Returns:
            Identifier string. Uniqueness is not checked here; the
            database primary key rejects duplicates.
        """
        pass


class RandomShortLinkStrategy(IdentifierStrategy):
    """
    Random short link strategy.
    Draws characters uniformly, with replacement, from the 62-char
    alphanumeric alphabet.

    Pros: Simple, unpredictable, no DB round trip
    Cons: Collisions possible; surfaced by the primary key constraint
    """

    ALPHABET = string.ascii_letters + string.digits

    # First path segments served by other routes; a short link equal to one
    # of these could be stored but never redirected
    RESERVED = frozenset({"health", "create", "qrcodes", "api", "docs", "redoc"})

    def __init__(self, length: int = 6, rng: random.Random = _system_random):
        if length < 1:
            raise ValueError(f"Short link length must be positive, got {length}")
        self.length = length
        self.rng = rng

    def generate(self) -> str:
        """Generate a random short link of the configured length, skipping reserved names"""
        while True:
            code = ''.join(self.rng.choice(self.ALPHABET) for _ in range(self.length))
            if code not in self.RESERVED:
                return code


class UUIDStrategy(IdentifierStrategy):
    """
    Version-4 random UUID strategy for QR ids.
    Treated as globally unique for practical purposes.
    """

    def generate(self) -> str:
        return str(uuid.uuid4())
