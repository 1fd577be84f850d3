from fastapi import APIRouter, Depends, HTTPException, Request, status
from qrlink_app.dependencies import client_ip, get_qr_service, public_base_url, user_agent
from qrlink_app.errors import NotFoundError
from qrlink_app.schemas.url import LinkCreate, QRCodeResponse
from qrlink_app.services.qr_service import QRCodeService

router = APIRouter(prefix="/qrcodes", tags=["qrcodes"])


def _image_url(request: Request, qr_id: str) -> str:
    return f"{public_base_url(request)}/qrcodes/{qr_id}.png"


@router.post("", response_model=QRCodeResponse, status_code=status.HTTP_201_CREATED)
def create_qr_code(
    link_data: LinkCreate,
    request: Request,
    qr_service: QRCodeService = Depends(get_qr_service)
):
    """Create a QR code image for a long URL"""
    long_url = str(link_data.long_url)
    qr_id = qr_service.create_qr_code(
        long_url,
        ip=client_ip(request),
        user_agent=user_agent(request),
    )
    # The record may not be stored (file-only backend), so answer from input
    return QRCodeResponse(qr_id=qr_id, long_url=long_url, image_url=_image_url(request, qr_id))


@router.get("/{qr_id}", response_model=QRCodeResponse)
def get_qr_code_info(
    qr_id: str,
    request: Request,
    qr_service: QRCodeService = Depends(get_qr_service)
):
    """Get the record behind a QR code"""
    try:
        record = qr_service.qr_record_for(qr_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="QR code not found"
        )
    return QRCodeResponse(
        qr_id=record.qr_id,
        long_url=record.long_url,
        create_time=record.create_time,
        image_url=_image_url(request, record.qr_id),
    )
