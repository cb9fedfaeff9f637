"""Core data models."""

from .report import (
    BarChartEntry,
    CombinedReport,
    PieChartEntry,
    SaleStatistics,
)

__all__ = [
    "BarChartEntry",
    "CombinedReport",
    "PieChartEntry",
    "SaleStatistics",
]
