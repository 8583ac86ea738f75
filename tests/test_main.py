"""Tests for the server entry point transport selection."""

from __future__ import annotations

from typing import Any

import pytest

from content_unroller import main


@pytest.fixture
def recorded_runs(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    runs: list[dict[str, Any]] = []
    monkeypatch.setattr(main.mcp, "run", lambda **kwargs: runs.append(kwargs))
    for name in ("MCP_TRANSPORT", "MCP_HOST", "MCP_PORT", "MCP_HTTP_PATH"):
        monkeypatch.delenv(name, raising=False)
    return runs


def test_defaults_to_stdio(recorded_runs):
    main.run()

    assert recorded_runs == [{}]


def test_http_transport_uses_host_port_and_path(recorded_runs, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MCP_TRANSPORT", "HTTP")
    monkeypatch.setenv("MCP_PORT", "9001")
    monkeypatch.setenv("MCP_HTTP_PATH", "/unroller")

    main.run()

    assert recorded_runs == [{"transport": "http", "host": "0.0.0.0", "port": 9001, "path": "/unroller"}]


def test_sse_transport_ignores_http_path(recorded_runs, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MCP_TRANSPORT", "sse")
    monkeypatch.setenv("MCP_HTTP_PATH", "/ignored")

    main.run()

    assert recorded_runs == [{"transport": "sse", "host": "0.0.0.0", "port": 8000}]
