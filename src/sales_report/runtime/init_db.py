"""Database initialization script."""

from src.sales_report.core.services.database.db_manage import DbManageService
from src.sales_report.core.services.database.db_session import DbSessionService


def init_db() -> None:
    """Create all database tables."""
    db_service = DbSessionService()
    try:
        DbManageService(db_service.engine).create_all()
    finally:
        db_service.dispose()


if __name__ == "__main__":
    init_db()
