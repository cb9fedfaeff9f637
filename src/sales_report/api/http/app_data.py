from dataclasses import dataclass

from src.sales_report.core.services import (
    DbSessionService,
    ReportClient,
    SeedService,
)


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    seed_service: SeedService
    report_client: ReportClient
