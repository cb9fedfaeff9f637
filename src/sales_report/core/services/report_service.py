"""Month-filtered aggregate queries over the products table."""

from sqlalchemy import and_, case, func
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from src.sales_report.core.models.report import (
    BarChartEntry,
    PieChartEntry,
    SaleStatistics,
)
from src.sales_report.core.months import MonthFilter
from src.sales_report.entities.service.product import ProductTable

# (label, exclusive lower bound, inclusive upper bound); the first band also
# includes 0 and the open-ended band is added separately.
PRICE_BANDS: tuple[tuple[str, int, int], ...] = (
    ("0 - 100", 0, 100),
    ("101 - 200", 100, 200),
    ("201 - 300", 200, 300),
    ("301 - 400", 300, 400),
    ("401 - 500", 400, 500),
    ("501 - 600", 500, 600),
    ("601 - 700", 600, 700),
    ("701 - 800", 700, 800),
    ("801 - 900", 800, 900),
)
OPEN_BAND_LABEL = "901-above"
OPEN_BAND_FLOOR = 900


def month_of_sale(month: MonthFilter) -> ColumnElement[bool]:
    """Rows whose dateOfSale (YYYY-MM-...) falls in the given month."""
    return func.substr(col(ProductTable.dateOfSale), 6, 2) == month.number


def price_range_expression() -> ColumnElement[str]:
    price = col(ProductTable.price)
    whens = []
    for label, low, high in PRICE_BANDS:
        lower = price >= low if low == 0 else price > low
        whens.append((and_(lower, price <= high), label))
    whens.append((price > OPEN_BAND_FLOOR, OPEN_BAND_LABEL))
    return case(*whens)


class ReportService:
    """Runs the statistics, bar-chart and pie-chart queries for one month."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def statistics(self, month: MonthFilter) -> SaleStatistics:
        """Total sale amount plus sold / not-sold item counts.

        The three aggregates are independent queries; each one sees the table
        as it is when it runs.
        """
        in_month = month_of_sale(month)
        total_sale_amount = self._session.exec(
            select(func.sum(ProductTable.price)).where(in_month)
        ).one()
        total_sold_items = self._session.exec(
            select(func.count())
            .select_from(ProductTable)
            .where(in_month, col(ProductTable.sold).is_(True))
        ).one()
        total_not_sold_items = self._session.exec(
            select(func.count())
            .select_from(ProductTable)
            .where(in_month, col(ProductTable.sold).is_(False))
        ).one()

        return SaleStatistics(
            totalSaleAmount=total_sale_amount or 0,
            totalSoldItems=total_sold_items or 0,
            totalNotSoldItems=total_not_sold_items or 0,
        )

    def bar_chart(self, month: MonthFilter) -> list[BarChartEntry]:
        """Item counts per price band; bands with no items are omitted."""
        price_range = price_range_expression().label("priceRange")
        rows = self._session.exec(
            select(price_range, func.count().label("itemCount"))
            .select_from(ProductTable)
            .where(month_of_sale(month))
            .group_by(price_range)
        ).all()
        return [
            BarChartEntry(priceRange=row.priceRange, itemCount=row.itemCount)
            for row in rows
        ]

    def pie_chart(self, month: MonthFilter) -> list[PieChartEntry]:
        """Item counts per category."""
        rows = self._session.exec(
            select(ProductTable.category, func.count().label("itemCount"))
            .where(month_of_sale(month))
            .group_by(ProductTable.category)
        ).all()
        return [
            PieChartEntry(category=row.category, itemCount=row.itemCount)
            for row in rows
        ]
