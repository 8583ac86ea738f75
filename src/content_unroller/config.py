"""Environment-driven settings for the content unroller."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from content_unroller.domain.body import DYNAMIC_CONTENT_TYPE, IMAGE_SET_TYPE
from content_unroller.domain.content_reader import ReaderConfig

DEFAULT_WHITELIST = f"^({IMAGE_SET_TYPE}|{DYNAMIC_CONTENT_TYPE})"


class Settings(BaseModel):
    """Backend locations, expansion whitelist and HTTP behaviour."""

    api_host: str = "http://api.ft.com"
    whitelist: str = DEFAULT_WHITELIST
    http_timeout: float = 10.0
    reader: ReaderConfig = ReaderConfig()

    @field_validator("api_host")
    @classmethod
    def _with_scheme(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value.startswith("http://") or value.startswith("https://"):
            return value
        return f"http://{value}"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (``.env`` files included)."""

        load_dotenv()
        defaults = ReaderConfig()
        reader = ReaderConfig(
            content_source_app_name=os.getenv("CONTENT_SOURCE_APP_NAME", defaults.content_source_app_name),
            content_source_url=os.getenv("CONTENT_SOURCE_URL", defaults.content_source_url),
            internal_content_source_app_name=os.getenv(
                "INTERNAL_CONTENT_SOURCE_APP_NAME", defaults.internal_content_source_app_name
            ),
            internal_content_source_url=os.getenv(
                "INTERNAL_CONTENT_SOURCE_URL", defaults.internal_content_source_url
            ),
            native_content_source_app_name=os.getenv(
                "NATIVE_CONTENT_SOURCE_APP_NAME", defaults.native_content_source_app_name
            ),
            native_content_source_url=os.getenv("NATIVE_CONTENT_SOURCE_URL", defaults.native_content_source_url),
            native_content_source_auth=os.getenv("NATIVE_CONTENT_SOURCE_AUTH") or None,
            transform_content_source_app_name=os.getenv(
                "TRANSFORM_CONTENT_SOURCE_APP_NAME", defaults.transform_content_source_app_name
            ),
            transform_content_source_url=os.getenv(
                "TRANSFORM_CONTENT_SOURCE_URL", defaults.transform_content_source_url
            ),
        )
        return cls(
            api_host=os.getenv("API_HOST", "api.ft.com"),
            whitelist=os.getenv("CONTENT_WHITELIST", DEFAULT_WHITELIST),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "10.0")),
            reader=reader,
        )
