"""
Factory for creating QR record stores.
"""

from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session
from .strategies import QRRecordStore, SQLQRRecordStore, NullQRRecordStore
from qrlink_app.config import settings


class QRRecordBackend(Enum):
    """Available QR record backends"""
    SQL = "sql"
    NONE = "none"


class QRRecordStoreFactory:
    """
    Simple factory for creating QR record stores.

    The SQL store wraps a per-request session, so unlike the image store it
    is built fresh for every request instead of cached.
    """

    @classmethod
    def create(cls, db: Session, backend: Optional[QRRecordBackend] = None) -> QRRecordStore:
        """
        Create a QR record store.

        Args:
            db: Database session for the current request
            backend: Backend type; if None, uses value from settings

        Returns:
            QRRecordStore instance
        """
        if backend is None:
            backend = QRRecordBackend(settings.qr_record_backend)

        if backend == QRRecordBackend.SQL:
            return SQLQRRecordStore(db)
        elif backend == QRRecordBackend.NONE:
            return NullQRRecordStore()
        else:
            raise ValueError(f"Unknown qr record backend: {backend}")
