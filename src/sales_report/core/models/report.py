"""Response models for the month-filtered reports."""

from pydantic import BaseModel, Field


class SaleStatistics(BaseModel):
    """Totals for one month."""

    totalSaleAmount: float = Field(default=0, description="Sum of price over the month")
    totalSoldItems: int = Field(default=0, description="Rows marked sold")
    totalNotSoldItems: int = Field(default=0, description="Rows not marked sold")


class BarChartEntry(BaseModel):
    """Item count for one price band."""

    priceRange: str | None = Field(description="Price band label, e.g. '101 - 200'")
    itemCount: int


class PieChartEntry(BaseModel):
    """Item count for one category."""

    category: str | None
    itemCount: int


class CombinedReport(BaseModel):
    """The three month reports merged under named keys."""

    statistics: SaleStatistics
    barChart: list[BarChartEntry]
    pieChart: list[PieChartEntry]
