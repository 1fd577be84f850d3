from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables (DATABASE_URL, DATA_DIR, PORT, ...)
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "QR Link"
    app_version: str = "1.0.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Database
    database_url: str = "sqlite:///./qrlink.db"

    # Content directory for generated QR images
    data_dir: str = "data"

    # Public base URL used in responses. When unset, the request's own
    # scheme and host are used.
    base_url: Optional[str] = None

    # Short link generation
    short_link_length: int = 6
    short_link_max_attempts: int = 1  # 1 = no retry on primary key collision

    # QR code generation
    qr_image_size: int = 256  # Pixels (square)
    qr_record_backend: str = "sql"  # Options: "sql", "none"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def default_blank_data_dir(cls, value):
        """Blank DATA_DIR falls back to 'data'"""
        if value is None or not str(value).strip():
            return "data"
        return str(value).strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip().rstrip("/")


# Create settings instance
settings = Settings()
