"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Query, Request, status
from sqlmodel import Session

from src.sales_report.api.http.app_data import ApplicationDependencies
from src.sales_report.core.months import InvalidMonthError, MonthFilter, parse_month
from src.sales_report.core.services import (
    DbSessionService,
    ReportClient,
    ReportService,
    SeedService,
)


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    return deps.database_service


def get_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a database session tied to the current request lifecycle."""
    with database_service.session_scope() as db:
        yield db


def get_report_service(db: Session = Depends(get_session)) -> ReportService:
    return ReportService(db)


def get_seed_service(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> SeedService:
    return deps.seed_service


def get_report_client(
    deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> ReportClient:
    return deps.report_client


def require_month(month: str | None = Query(default=None)) -> MonthFilter:
    """Reject the request with 400 unless ``month`` is one of the twelve month names."""
    try:
        return parse_month(month)
    except InvalidMonthError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
