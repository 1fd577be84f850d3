"""
Database models for the QR link service.

Two record kinds: short links (redirects) and QR codes (image + long URL).
"""

from .url import ShortLink, QRCode

__all__ = ["ShortLink", "QRCode"]
