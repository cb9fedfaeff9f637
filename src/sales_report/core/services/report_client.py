"""HTTP client the combined-data endpoint uses to call the three report endpoints."""

import asyncio
from typing import Any

import httpx
from loguru import logger

from src.sales_report.core.months import MonthFilter

STATISTICS_PATH = "/statistics"
BAR_CHART_PATH = "/bar-chart"
PIE_CHART_PATH = "/pie-chart"


class ReportClient:
    """Calls /statistics, /bar-chart and /pie-chart concurrently over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get(self, client: httpx.AsyncClient, path: str, month: MonthFilter) -> Any:
        response = await client.get(path, params={"month": month.name})
        response.raise_for_status()
        return response.json()

    async def fetch_combined(self, month: MonthFilter) -> dict[str, Any]:
        """Fetch the three reports in parallel and merge them under named keys.

        The first failed sub-request cancels the others and propagates inside an
        ExceptionGroup; there is no partial result.
        """
        logger.debug("Fetching combined reports for {} from {}", month.name, self._base_url)
        async with httpx.AsyncClient(
            base_url=self._base_url, timeout=self._timeout, transport=self._transport
        ) as client:
            async with asyncio.TaskGroup() as tg:
                statistics = tg.create_task(self._get(client, STATISTICS_PATH, month))
                bar_chart = tg.create_task(self._get(client, BAR_CHART_PATH, month))
                pie_chart = tg.create_task(self._get(client, PIE_CHART_PATH, month))

        return {
            "statistics": statistics.result(),
            "barChart": bar_chart.result(),
            "pieChart": pie_chart.result(),
        }
