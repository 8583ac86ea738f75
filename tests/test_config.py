"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from content_unroller.config import DEFAULT_WHITELIST, Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("API_HOST", "CONTENT_WHITELIST", "CONTENT_SOURCE_URL", "HTTP_TIMEOUT", "NATIVE_CONTENT_SOURCE_AUTH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("content_unroller.config.load_dotenv", lambda: False)

    settings = Settings.from_env()

    assert settings.api_host == "http://api.ft.com"
    assert settings.whitelist == DEFAULT_WHITELIST
    assert settings.http_timeout == 10.0
    assert settings.reader.content_source_app_name == "content-public-read"
    assert settings.reader.native_content_source_auth is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("content_unroller.config.load_dotenv", lambda: False)
    monkeypatch.setenv("API_HOST", "https://api.example.com/")
    monkeypatch.setenv("CONTENT_SOURCE_URL", "http://cpr:8080/content")
    monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("NATIVE_CONTENT_SOURCE_AUTH", "dXNlcjpwYXNz")

    settings = Settings.from_env()

    assert settings.api_host == "https://api.example.com"
    assert settings.reader.content_source_url == "http://cpr:8080/content"
    assert settings.http_timeout == 2.5
    assert settings.reader.native_content_source_auth == "dXNlcjpwYXNz"
