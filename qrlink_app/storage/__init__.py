"""
Storage module for QR codes.

QR records are persisted through the Strategy Pattern (SQL or none);
images always live on disk in the content directory.
"""

from .strategies import QRRecordStore, SQLQRRecordStore, NullQRRecordStore
from .factory import QRRecordStoreFactory, QRRecordBackend
from .images import ImageStore

__all__ = [
    "QRRecordStore",
    "SQLQRRecordStore",
    "NullQRRecordStore",
    "QRRecordStoreFactory",
    "QRRecordBackend",
    "ImageStore",
]
