"""FastMCP resource definitions and shared service wiring for the content unroller."""

from __future__ import annotations

import logging
from typing import Any

from content_unroller.config import Settings
from content_unroller.domain.content_reader import ContentReader
from content_unroller.domain.healthchecks import BackendHealthCheck, HealthService
from content_unroller.domain.resolver import ContentResolver
from content_unroller.mcp import mcp

logger = logging.getLogger(__name__)

_settings: Settings | None = None
_content_reader: ContentReader | None = None
_content_resolver: ContentResolver | None = None
_health_service: HealthService | None = None


def get_settings() -> Settings:
    """Return the settings loaded from the environment."""

    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_content_reader() -> ContentReader:
    """Return a singleton ContentReader built from settings."""

    global _content_reader
    if _content_reader is None:
        settings = get_settings()
        _content_reader = ContentReader(settings.reader, timeout=settings.http_timeout)
    return _content_reader


def get_content_resolver() -> ContentResolver:
    global _content_resolver
    if _content_resolver is None:
        settings = get_settings()
        _content_resolver = ContentResolver(
            get_content_reader(),
            whitelist=settings.whitelist,
            api_host=settings.api_host,
        )
    return _content_resolver


def get_health_service() -> HealthService:
    """Return the health aggregator covering every configured backend."""

    global _health_service
    if _health_service is None:
        settings = get_settings()
        reader = settings.reader
        backends = [
            (reader.content_source_app_name, reader.content_source_url),
            (reader.internal_content_source_app_name, reader.internal_content_source_url),
        ]
        _health_service = HealthService(
            [BackendHealthCheck(name, url, timeout=settings.http_timeout) for name, url in backends]
        )
    return _health_service


@mcp.resource(
    "health://content-unroller/checks",
    description="Connectivity checks for every backend the unroller reads from.",
    tags={"health"},
)
async def content_unroller_health() -> dict[str, Any]:
    report = await get_health_service().health()
    logger.info("Health check ok=%s", report["ok"])
    return report


@mcp.resource(
    "health://content-unroller/gtg",
    description="Good-to-go status: fails as soon as one backend is unavailable.",
    tags={"health"},
)
async def content_unroller_gtg() -> dict[str, Any]:
    status = await get_health_service().gtg()
    return status.model_dump()
