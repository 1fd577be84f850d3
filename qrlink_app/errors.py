"""
Error taxonomy for the QR link service.

Every error carries the HTTP status it maps to and a generic message that is
safe to show to clients. The detail passed to the constructor is for logs only.
"""

from fastapi import status


class QRLinkError(Exception):
    """Base class for all service errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "Internal server error"


class ValidationError(QRLinkError):
    """Missing or invalid input"""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Missing long URL"


class NotFoundError(QRLinkError):
    """Unknown short link or QR id"""

    status_code = status.HTTP_404_NOT_FOUND
    public_message = "Not found"


class StorageError(QRLinkError):
    """Insert or query against the database failed"""

    public_message = "Failed to store or load record"


class EncodeError(QRLinkError):
    """Long URL could not be encoded as a QR code"""

    public_message = "Failed to create qr code"


class ImageIOError(QRLinkError):
    """Reading or writing a QR image file failed"""

    public_message = "Failed to access qr code image"
