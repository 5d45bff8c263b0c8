"""
Runtime configuration.

Values are read from the environment once, into a Settings object that is
passed to the API client and the form controller. Nothing reads the
environment at call time.
"""

import os
from urllib.parse import quote
from pydantic import BaseModel, Field, field_validator

DEFAULT_API_URL = "https://certificate-backend.onrender.com"


class Settings(BaseModel):
    """Connection settings for the remote certificate service."""
    api_base_url: str = Field(DEFAULT_API_URL, description="Base endpoint of the certificate service")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    log_level: str = Field("INFO", description="Root log level")

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, api_base_url: str = None) -> "Settings":
        """
        Build settings from API_URL, API_TIMEOUT and LOG_LEVEL.

        An explicit api_base_url (e.g. from the command line) wins over API_URL.
        """
        return cls(
            api_base_url=api_base_url or os.getenv("API_URL", DEFAULT_API_URL),
            timeout=float(os.getenv("API_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def upload_url(self, file_path: str) -> str:
        """URL under which a previously stored upload is served."""
        return self.api_base_url + upload_path(file_path)


def upload_path(file_path: str) -> str:
    """Server path of a stored upload, each segment URL-quoted."""
    segments = file_path.strip("/").split("/")
    return "/uploads/" + "/".join(quote(s, safe="") for s in segments)
