"""
Browser-facing routes: index page, form submission, QR image download.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response
from qrlink_app.dependencies import (
    client_ip,
    get_image_store,
    get_link_service,
    get_qr_service,
    public_base_url,
    user_agent,
)
from qrlink_app.errors import ValidationError
from qrlink_app.services.link_service import LinkService
from qrlink_app.services.qr_service import QRCodeService
from qrlink_app.storage.images import ImageStore
from qrlink_app.ui import index_page, qr_code_snippet, short_link_snippet

router = APIRouter(tags=["web"])

QR_SOURCE = "qr"


@router.get("/", include_in_schema=False)
def index():
    return index_page()


@router.post("/create", include_in_schema=False)
def create(
    request: Request,
    long_url: str = Form(""),
    source: Optional[str] = Form(None),
    link_service: LinkService = Depends(get_link_service),
    qr_service: QRCodeService = Depends(get_qr_service),
):
    """
    Handle form submission.

    source=qr creates a QR code; anything else creates a short link.
    """
    long_url = long_url.strip()
    if not long_url:
        raise ValidationError("long_url form field is missing or blank")

    ip = client_ip(request)
    agent = user_agent(request)
    base = public_base_url(request)

    if source == QR_SOURCE:
        qr_id = qr_service.create_qr_code(long_url, ip=ip, user_agent=agent)
        return qr_code_snippet(f"{base}/qrcodes/{qr_id}.png", long_url)

    short_link = link_service.create_short_link(long_url, ip=ip, user_agent=agent)
    return short_link_snippet(f"{base}/{short_link}", long_url)


@router.get("/qrcodes/{qr_id}.png", include_in_schema=False)
def qr_image(qr_id: str, images: ImageStore = Depends(get_image_store)):
    """Serve a stored QR image; NotFoundError becomes a 404"""
    content = images.read_image(qr_id)
    return Response(content=content, media_type="image/png")
