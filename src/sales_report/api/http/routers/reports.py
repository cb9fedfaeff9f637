"""Month-filtered report endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from src.sales_report.api.http.deps import (
    get_report_client,
    get_report_service,
    require_month,
)
from src.sales_report.core.models.report import (
    BarChartEntry,
    CombinedReport,
    PieChartEntry,
    SaleStatistics,
)
from src.sales_report.core.months import MonthFilter
from src.sales_report.core.services import ReportClient, ReportService

router = APIRouter(tags=["reports"])


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("/statistics", response_model=SaleStatistics)
def get_statistics(
    month: MonthFilter = Depends(require_month),
    reports: ReportService = Depends(get_report_service),
) -> SaleStatistics:
    """Total sale amount and sold / not-sold counts for the month."""
    try:
        return reports.statistics(month)
    except Exception as e:
        logger.exception("Statistics query failed for {}", month.name)
        raise _server_error("Error fetching statistics.") from e


@router.get("/bar-chart", response_model=list[BarChartEntry])
def get_bar_chart(
    month: MonthFilter = Depends(require_month),
    reports: ReportService = Depends(get_report_service),
) -> list[BarChartEntry]:
    """Item counts per price band for the month."""
    try:
        return reports.bar_chart(month)
    except Exception as e:
        logger.exception("Bar chart query failed for {}", month.name)
        raise _server_error("Error fetching bar chart data.") from e


@router.get("/pie-chart", response_model=list[PieChartEntry])
def get_pie_chart(
    month: MonthFilter = Depends(require_month),
    reports: ReportService = Depends(get_report_service),
) -> list[PieChartEntry]:
    """Item counts per category for the month."""
    try:
        return reports.pie_chart(month)
    except Exception as e:
        logger.exception("Pie chart query failed for {}", month.name)
        raise _server_error("Error fetching pie chart data.") from e


@router.get("/combined-data", response_model=CombinedReport)
async def get_combined_data(
    month: MonthFilter = Depends(require_month),
    client: ReportClient = Depends(get_report_client),
) -> dict[str, Any]:
    """The three reports above, fetched over HTTP in parallel and merged."""
    try:
        return await client.fetch_combined(month)
    except Exception as e:
        logger.exception("Combined report failed for {}", month.name)
        raise _server_error("Error fetching combined data.") from e
