"""Tests for backend health checks."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from content_unroller.domain.healthchecks import BackendHealthCheck, HealthService


def make_check(name: str, status: int | None) -> BackendHealthCheck:
    async def handler(request: httpx.Request) -> httpx.Response:
        if status is None:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(status, text="{}")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BackendHealthCheck(name, f"https://{name}.example.com/", client=client)


@pytest.mark.asyncio
async def test_check_reports_ok():
    assert await make_check("content-public-read", 200).check() == (True, "Ok")


@pytest.mark.asyncio
async def test_check_reports_bad_status_and_unreachable_backend():
    ok, message = await make_check("content-public-read", 500).check()
    assert not ok
    assert message == "content-public-read service is not responding with OK. Status=500"

    ok, message = await make_check("document-store-api", None).check()
    assert not ok
    assert message.startswith("document-store-api service is unreachable:")


@pytest.mark.asyncio
async def test_health_report_lists_every_backend():
    service = HealthService([make_check("content-public-read", 200), make_check("document-store-api", 503)])

    report = await service.health()

    assert report["ok"] is False
    assert [check["id"] for check in report["checks"]] == [
        "check-connect-content-public-read",
        "check-connect-document-store-api",
    ]
    assert [check["ok"] for check in report["checks"]] == [True, False]


@pytest.mark.asyncio
async def test_gtg_fails_when_any_backend_is_down():
    service = HealthService([make_check("content-public-read", 200), make_check("document-store-api", 503)])

    status = await service.gtg()

    assert status.good_to_go is False
    assert "document-store-api" in status.message


@pytest.mark.asyncio
async def test_gtg_passes_when_all_backends_are_up():
    service = HealthService([make_check("content-public-read", 200), make_check("document-store-api", 200)])

    assert (await service.gtg()).good_to_go is True


@pytest.mark.asyncio
async def test_gtg_waits_for_cancelled_checks():
    release = asyncio.Event()
    finished: list[str] = []

    class SlowCheck(BackendHealthCheck):
        async def check(self) -> tuple[bool, str]:
            try:
                await release.wait()
            finally:
                finished.append(self.app_name)
            return True, "Ok"

    slow = SlowCheck("methode-api", "https://methode-api.example.com")
    service = HealthService([make_check("document-store-api", 503), slow])

    status = await service.gtg()

    assert status.good_to_go is False
    assert finished == ["methode-api"]
