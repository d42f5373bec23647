"""
Centralized application settings using Pydantic.

All environment variables are read once at startup and validated.
Use this instead of scattered os.getenv() calls throughout the codebase.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class VerifierSettings(BaseSettings):
    """Verification service endpoint configuration."""

    VERIFY_API_URL: str = "http://localhost:8000/api/check"
    # Unset means the request may wait indefinitely for the service
    VERIFY_TIMEOUT_SECONDS: Optional[float] = None
    MAX_FILE_SIZE_MB: int = 20

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}

    @field_validator("VERIFY_API_URL")
    @classmethod
    def validate_url(cls, url: str) -> str:
        url = url.strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError("VERIFY_API_URL must be an http(s) URL")
        return url

    @field_validator("VERIFY_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, timeout: Optional[float]) -> Optional[float]:
        if timeout is not None and timeout <= 0:
            raise ValueError("VERIFY_TIMEOUT_SECONDS must be positive")
        return timeout

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024


class AppSettings(BaseSettings):
    """General application settings."""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = {"case_sensitive": True, "env_file": ".env", "extra": "ignore"}


# Singleton instances - loaded once at module import
verifier_settings = VerifierSettings()
app_settings = AppSettings()
