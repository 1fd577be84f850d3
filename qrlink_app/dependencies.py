"""
FastAPI dependencies for dependency injection.

Services are built per request around the request's database session; the
image store is a process-wide singleton pointed at the content directory.
Tests override get_db and get_image_store via app.dependency_overrides.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from qrlink_app.config import settings
from qrlink_app.database.connection import get_db
from qrlink_app.services.link_service import LinkService
from qrlink_app.services.qr_service import QRCodeService
from qrlink_app.storage.factory import QRRecordStoreFactory
from qrlink_app.storage.images import ImageStore


@lru_cache()
def get_image_store() -> ImageStore:
    """
    Get image store instance (singleton).

    @lru_cache ensures this is called only once.
    """
    return ImageStore(settings.data_dir, image_size=settings.qr_image_size)


def get_link_service(db: Session = Depends(get_db)) -> LinkService:
    return LinkService(db=db)


def get_qr_service(
    db: Session = Depends(get_db),
    images: ImageStore = Depends(get_image_store)
) -> QRCodeService:
    """Get QRCodeService with record store and image store injected"""
    return QRCodeService(records=QRRecordStoreFactory.create(db), images=images)


def client_ip(request: Request) -> str:
    """Requester IP; the first X-Forwarded-For hop wins over the socket peer"""
    forwarded: Optional[str] = request.headers.get("x-forwarded-for")
    if forwarded and forwarded.split(",")[0].strip():
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")


def public_base_url(request: Request) -> str:
    """Base for URLs shown to users: settings.base_url, else the request's own"""
    if settings.base_url:
        return settings.base_url
    return str(request.base_url).rstrip("/")
