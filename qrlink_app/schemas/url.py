from pydantic import BaseModel, HttpUrl, Field, ConfigDict
from typing import Optional
from datetime import datetime


class LinkCreate(BaseModel):
    long_url: HttpUrl = Field(..., description="The original URL to shorten or encode")


class ShortLinkResponse(BaseModel):
    """Response schema that serializes the ShortLink model

    from_attributes=True enables ORM mode (reads from model attributes).
    short_url is filled in by the route since it depends on the request host.
    """
    short_link: str
    long_url: str
    create_time: Optional[datetime] = None
    short_url: str

    model_config = ConfigDict(from_attributes=True)


class QRCodeResponse(BaseModel):
    """Response schema for a QR code record plus its image URL"""
    qr_id: str
    long_url: str
    create_time: Optional[datetime] = None
    image_url: str

    model_config = ConfigDict(from_attributes=True)
