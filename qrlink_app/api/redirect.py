from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from qrlink_app.services.link_service import LinkService
from qrlink_app.dependencies import get_link_service

router = APIRouter(tags=["redirect"])


@router.get("/{short_link}")
def redirect_to_long_url(
    short_link: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL.

    Unknown short links raise NotFoundError, which the app-level handler
    turns into a 404. Registered last so it never shadows other routes.
    """
    long_url = link_service.long_url_for(short_link)
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
