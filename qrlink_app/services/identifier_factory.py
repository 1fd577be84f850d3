"""
Factory for creating identifier generation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from qrlink_app.services.identifier_strategies import (
    IdentifierStrategy,
    RandomShortLinkStrategy,
    UUIDStrategy
)
from qrlink_app.config import settings


class IdentifierKind(Enum):
    """Available identifier kinds"""
    SHORT_LINK = "short_link"
    QR_ID = "qr_id"


class IdentifierFactory:
    """Factory for creating identifier strategies with caching"""

    _instances = {}  # Cache for strategy instances

    @classmethod
    def create_strategy(cls, kind: IdentifierKind) -> IdentifierStrategy:
        """
        Create or return cached identifier strategy.

        Args:
            kind: Which identifier to generate

        Returns:
            A cached instance of an IdentifierStrategy

        Raises:
            ValueError: If kind is unknown
        """
        if kind in cls._instances:
            return cls._instances[kind]

        if kind == IdentifierKind.SHORT_LINK:
            instance = RandomShortLinkStrategy(length=settings.short_link_length)
        elif kind == IdentifierKind.QR_ID:
            instance = UUIDStrategy()
        else:
            raise ValueError(f"Unknown identifier kind: {kind}")

        cls._instances[kind] = instance
        return instance

    @classmethod
    def clear_instances(cls):
        """Clear cached instances (for testing)"""
        cls._instances = {}
