from typing import Optional

from qrlink_app.logging_config import get_logger
from qrlink_app.models.url import QRCode
from qrlink_app.services.identifier_factory import IdentifierFactory, IdentifierKind
from qrlink_app.services.identifier_strategies import IdentifierStrategy
from qrlink_app.storage.images import ImageStore
from qrlink_app.storage.strategies import QRRecordStore

logger = get_logger(__name__)


class QRCodeService:
    """
    QR code service with record store and image store injected.

    Creation writes the image first, then the record. If the record write
    fails the image is deleted again, so no QR image outlives a failed create.
    """

    def __init__(
        self,
        records: QRRecordStore,
        images: ImageStore,
        strategy: Optional[IdentifierStrategy] = None
    ):
        self.records = records
        self.images = images
        self.strategy = strategy or IdentifierFactory.create_strategy(IdentifierKind.QR_ID)

    def create_qr_code(self, long_url: str, ip: str, user_agent: Optional[str] = None) -> str:
        """Encode long_url, store image and record, return the new QR id

        Raises:
            EncodeError, ImageIOError: image could not be produced or written
            StorageError: record could not be stored (image is removed)
        """
        qr_id = self.strategy.generate()
        self.images.encode_and_store(long_url, qr_id)

        try:
            self.records.create(qr_id, long_url, ip, user_agent)
        except Exception:
            logger.warning(f"Removing image for qr code '{qr_id}' after failed record insert")
            self.images.delete_image(qr_id)
            raise

        logger.info(f"Created qr code '{qr_id}' for {long_url}")
        return qr_id

    def qr_record_for(self, qr_id: str) -> QRCode:
        return self.records.get(qr_id)

    def read_image(self, qr_id: str) -> bytes:
        return self.images.read_image(qr_id)
