"""
QR image encoding and file storage.

Images are PNG files named {qr_id}.png inside the content directory.
"""

import io
from pathlib import Path
from typing import Union

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from qrlink_app.errors import EncodeError, ImageIOError, NotFoundError
from qrlink_app.logging_config import get_logger

logger = get_logger(__name__)


class ImageStore:
    """
    Encodes long URLs as QR codes and keeps the PNGs on disk.

    Args:
        content_dir: Directory that holds the images (created on first write)
        image_size: Width and height of the written PNG in pixels
    """

    IMAGE_SUFFIX = ".png"

    def __init__(self, content_dir: Union[str, Path], image_size: int = 256):
        self.content_dir = Path(content_dir)
        self.image_size = image_size

    def path_for(self, qr_id: str) -> Path:
        """Path of the image for qr_id; rejects ids that would escape the content dir"""
        if not qr_id or Path(qr_id).name != qr_id or qr_id in (".", ".."):
            raise NotFoundError(f"invalid qr id {qr_id!r}")
        return self.content_dir / f"{qr_id}{self.IMAGE_SUFFIX}"

    def ensure_content_dir(self) -> None:
        try:
            self.content_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ImageIOError(f"cannot create content directory {self.content_dir}: {e}") from e

    def encode(self, long_url: str) -> bytes:
        """
        Encode long_url as a QR code at medium error correction.

        Returns:
            PNG bytes, image_size x image_size pixels
        """
        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=ERROR_CORRECT_M,
                box_size=10,
                border=4,
                image_factory=PilImage,
            )
            qr.add_data(long_url)
            qr.make(fit=True)
            raw = io.BytesIO()
            qr.make_image(fill_color="black", back_color="white").save(raw)
        except (DataOverflowError, ValueError) as e:
            raise EncodeError(f"cannot encode {len(long_url)} chars as qr code: {e}") from e

        # Nearest neighbour keeps module edges sharp
        raw.seek(0)
        with Image.open(raw) as image:
            scaled = image.resize((self.image_size, self.image_size), Image.NEAREST)
        out = io.BytesIO()
        scaled.save(out, format="PNG")
        return out.getvalue()

    def encode_and_store(self, long_url: str, qr_id: str) -> Path:
        """
        Encode long_url and write it to {content_dir}/{qr_id}.png.

        Raises:
            EncodeError: the URL could not be encoded
            ImageIOError: the file could not be written
        """
        path = self.path_for(qr_id)
        content = self.encode(long_url)
        self.ensure_content_dir()
        try:
            path.write_bytes(content)
        except OSError as e:
            raise ImageIOError(f"cannot write {path}: {e}") from e

        logger.debug(f"Wrote qr image {path} ({len(content)} bytes)")
        return path

    def read_image(self, qr_id: str) -> bytes:
        """
        Read the PNG for qr_id.

        Raises:
            NotFoundError: no image for qr_id
            ImageIOError: the file exists but could not be read
        """
        path = self.path_for(qr_id)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError(f"qr image {path} not found") from e
        except OSError as e:
            raise ImageIOError(f"cannot read {path}: {e}") from e

    def delete_image(self, qr_id: str) -> None:
        """Remove the PNG for qr_id; a missing file is not an error"""
        path = self.path_for(qr_id)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Failed to delete orphaned qr image {path}: {e}")
