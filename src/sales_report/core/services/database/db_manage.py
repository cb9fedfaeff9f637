"""Schema management for the products store."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create the products table if it does not exist yet."""
        from src.sales_report.entities.service.product import ProductTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")
