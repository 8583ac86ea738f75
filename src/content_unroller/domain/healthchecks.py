"""Connectivity checks for the backends the unroller depends on."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class CheckResult(BaseModel):
    """Outcome of probing one backend."""

    id: str
    name: str
    ok: bool
    severity: int = 1
    business_impact: str = "Image unrolled won't be available"
    technical_summary: str
    check_output: str


class GtgStatus(BaseModel):
    """Good-to-go answer for the whole service."""

    good_to_go: bool
    message: str = ""


class BackendHealthCheck:
    """Probe ``<url>/__health`` of a single backend."""

    def __init__(
        self,
        app_name: str,
        url: str,
        timeout: float = 10.0,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.app_name = app_name
        self._health_url = url.rstrip("/") + "/__health"
        self._timeout = timeout
        self._client = client

    async def check(self) -> tuple[bool, str]:
        """Return ``(ok, message)`` for the backend."""

        headers = {"Host": self.app_name}
        try:
            if self._client is not None:
                response = await self._client.get(self._health_url, headers=headers, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as session:
                    response = await session.get(self._health_url, headers=headers)
        except httpx.HTTPError as exc:
            return False, f"{self.app_name} service is unreachable: {exc}"
        if response.status_code != httpx.codes.OK:
            return False, f"{self.app_name} service is not responding with OK. Status={response.status_code}"
        return True, "Ok"

    async def result(self) -> CheckResult:
        ok, message = await self.check()
        return CheckResult(
            id=f"check-connect-{self.app_name}",
            name=f"Check connectivity to {self.app_name}",
            ok=ok,
            technical_summary=f"Cannot connect to {self.app_name}.",
            check_output=message,
        )


class HealthService:
    """Aggregate backend checks into a health report and a good-to-go status."""

    def __init__(self, checks: Sequence[BackendHealthCheck]) -> None:
        self._checks = list(checks)

    async def health(self) -> dict[str, Any]:
        results = await asyncio.gather(*(check.result() for check in self._checks))
        return {
            "name": "content-unroller",
            "ok": all(result.ok for result in results),
            "checks": [result.model_dump() for result in results],
        }

    async def gtg(self) -> GtgStatus:
        """Run every check in parallel and report the first failure to complete."""

        tasks = [asyncio.create_task(check.check()) for check in self._checks]
        try:
            for finished in asyncio.as_completed(tasks):
                ok, message = await finished
                if not ok:
                    logger.warning("Good-to-go check failed: %s", message)
                    return GtgStatus(good_to_go=False, message=message)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        return GtgStatus(good_to_go=True)
