"""Core services exports."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .report_client import ReportClient
from .report_service import ReportService
from .seed_service import (
    DuplicateProductError,
    InvalidSeedDataError,
    SeedError,
    SeedService,
)

__all__ = [
    # Database
    "DbManageService",
    "DbSessionService",
    # Reports
    "ReportClient",
    "ReportService",
    # Seeding
    "DuplicateProductError",
    "InvalidSeedDataError",
    "SeedError",
    "SeedService",
]
