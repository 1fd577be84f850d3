from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from qrlink_app.database.connection import Base


class ShortLink(Base):
    """
    Short link record.

    The short_link primary key enforces uniqueness: a generated code that
    already exists makes the insert fail. Rows are never updated
    or deleted (no expiry).
    """
    __tablename__ = "short_links"

    short_link = Column(String(16), primary_key=True)  # 6 chars by default, see short_link_length
    long_url = Column(String, nullable=False)
    create_time = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ip = Column(String, nullable=False)
    user_agent = Column(String, nullable=True)


class QRCode(Base):
    """
    QR code record. The image lives at {data_dir}/{qr_id}.png.
    """
    __tablename__ = "qr_codes"

    qr_id = Column(String(36), primary_key=True)  # UUID4 text
    long_url = Column(String, nullable=False)
    create_time = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ip = Column(String, nullable=False)
    user_agent = Column(String, nullable=True)
