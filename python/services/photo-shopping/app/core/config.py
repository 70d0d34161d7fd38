"""
Configuration management for Photo Shopping Service.
Loads environment variables using Pydantic Settings.
"""

from enum import Enum
from typing import List, Optional, Union
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class BlobStoreBackend(str, Enum):
    """Enum for blob store backends."""
    S3 = "s3"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Photo Shopping Service"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS Configuration
    CORS_ORIGINS: Union[str, List[str]] = ["*"]

    # Public URL of this service (used to build the upload URL)
    PUBLIC_SERVICE_URL: str = "http://localhost:8000"

    # Blob Store Configuration
    BLOB_STORE_BACKEND: BlobStoreBackend = BlobStoreBackend.S3
    MINIO_ENDPOINT: str = "localhost:9000"  # Internal MinIO endpoint (e.g., 192.168.1.100:9000)
    MINIO_ACCESS_KEY: str = ""
    MINIO_SECRET_KEY: str = ""
    MINIO_SECURE: bool = False               # Set to True for HTTPS
    UPLOADS_BUCKET: str = "photo-uploads"

    # Bytes fetched per range read when loading an uploaded image
    BLOB_FETCH_SIZE: int = Field(default=1015808, gt=0)

    # Shopping Provider Configuration
    SHOPPING_SERVICE_URL: str = "http://localhost:8081"
    SHOPPING_API_KEY: Optional[str] = None
    SHOPPING_QUERY_LANGUAGE: str = "en"
    SHOPPING_MAX_RESULTS: int = Field(default=24, ge=1)
    SHOPPING_TIMEOUT_SECONDS: float = 30.0

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, values):
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if isinstance(values.get("CORS_ORIGINS"), str):
            values["CORS_ORIGINS"] = [
                origin.strip() for origin in values["CORS_ORIGINS"].split(",")
            ]
        return values

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
