from fastapi import APIRouter, Depends, HTTPException, Request, status
from qrlink_app.dependencies import client_ip, get_link_service, public_base_url, user_agent
from qrlink_app.errors import NotFoundError
from qrlink_app.schemas.url import LinkCreate, ShortLinkResponse
from qrlink_app.services.link_service import LinkService

router = APIRouter(prefix="/links", tags=["links"])


@router.post("", response_model=ShortLinkResponse, status_code=status.HTTP_201_CREATED)
def create_short_link(
    link_data: LinkCreate,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a new short link"""
    short_link = link_service.create_short_link(
        str(link_data.long_url),
        ip=client_ip(request),
        user_agent=user_agent(request),
    )
    record = link_service.get_short_link(short_link)
    return ShortLinkResponse(
        short_link=record.short_link,
        long_url=record.long_url,
        create_time=record.create_time,
        short_url=f"{public_base_url(request)}/{record.short_link}",
    )


@router.get("/{short_link}", response_model=ShortLinkResponse)
def get_short_link_info(
    short_link: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """Get information about a short link"""
    try:
        record = link_service.get_short_link(short_link)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short link not found"
        )
    return ShortLinkResponse(
        short_link=record.short_link,
        long_url=record.long_url,
        create_time=record.create_time,
        short_url=f"{public_base_url(request)}/{record.short_link}",
    )
