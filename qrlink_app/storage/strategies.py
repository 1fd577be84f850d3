"""
QR record storage strategies using Strategy Pattern.

Allows switching how QR code records are persisted:
- SQL: Row per QR code in the relational database (default)
- Null: No record at all; the QR id is only an image filename
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from qrlink_app.errors import NotFoundError, StorageError
from qrlink_app.logging_config import get_logger
from qrlink_app.models.url import QRCode

logger = get_logger(__name__)


class QRRecordStore(ABC):
    """
    Abstract base class for QR record stores.

    Pattern: Strategy Pattern
    Similar to: Django's cache backends, Celery's brokers
    """

    @abstractmethod
    def create(
        self,
        qr_id: str,
        long_url: str,
        ip: str,
        user_agent: Optional[str] = None
    ) -> None:
        """
        Persist a QR code record.

        Raises:
            StorageError: the record could not be stored
        """
        pass

    @abstractmethod
    def get(self, qr_id: str) -> QRCode:
        """
        Fetch a QR code record.

        Raises:
            NotFoundError: no record for qr_id
            StorageError: the lookup failed
        """
        pass


class SQLQRRecordStore(QRRecordStore):
    """
    SQLAlchemy-backed QR record store.

    One row per QR code, keyed by the UUID. Uses the request's session so
    the row shares the connection pool with short link writes.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        qr_id: str,
        long_url: str,
        ip: str,
        user_agent: Optional[str] = None
    ) -> None:
        record = QRCode(qr_id=qr_id, long_url=long_url, ip=ip, user_agent=user_agent)
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert qr code record '{qr_id}': {e}")
            raise StorageError(str(e)) from e

    def get(self, qr_id: str) -> QRCode:
        try:
            record = self.db.get(QRCode, qr_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to query qr code record '{qr_id}': {e}")
            raise StorageError(str(e)) from e

        if record is None:
            raise NotFoundError(f"qr code {qr_id!r} not found")
        return record


class NullQRRecordStore(QRRecordStore):
    """
    Store that keeps nothing.

    Used for the file-only variant: the image file is the only artifact, so
    record lookups always miss while image retrieval still works.
    """

    def create(
        self,
        qr_id: str,
        long_url: str,
        ip: str,
        user_agent: Optional[str] = None
    ) -> None:
        logger.debug(f"Null record store: not persisting qr code '{qr_id}'")

    def get(self, qr_id: str) -> QRCode:
        raise NotFoundError(f"qr code records are not stored (requested {qr_id!r})")
