"""One-time loading of product seed data from the remote feed."""

from collections.abc import Iterable
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from src.sales_report.core.services.database.db_session import DbSessionService
from src.sales_report.entities.service.product import Product, ProductRepository


class SeedError(Exception):
    """Base class for seed failures."""


class DuplicateProductError(SeedError):
    """A seed record's id is already stored; the whole batch was rolled back."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} already exists in the database.")


class InvalidSeedDataError(SeedError):
    """The feed body or one of its records could not be parsed."""


class SeedService:
    """Fetches the product feed and bulk-inserts it in a single transaction."""

    def __init__(
        self,
        database_service: DbSessionService,
        source_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._database_service = database_service
        self._source_url = source_url
        self._timeout = timeout
        self._transport = transport

    @property
    def source_url(self) -> str:
        return self._source_url

    async def fetch_seed_data(self) -> list[dict[str, Any]]:
        """GET the feed and return its JSON array of raw product records."""
        logger.info("Fetching seed data from {}", self._source_url)
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.get(self._source_url)
            response.raise_for_status()
            try:
                payload = response.json()
            except ValueError as e:
                raise InvalidSeedDataError("Seed feed did not return valid JSON") from e

        if not isinstance(payload, list):
            raise InvalidSeedDataError(
                f"Seed feed must be a JSON array, got {type(payload).__name__}"
            )
        logger.info("Fetched {} seed records", len(payload))
        return payload

    def insert_seed_data(self, records: Iterable[dict[str, Any]]) -> int:
        """Insert every record or none of them.

        Each id is looked up before its insert, so a record that collides with
        a stored row or an earlier record of the same batch raises
        DuplicateProductError and rolls the transaction back.
        """
        inserted = 0
        with self._database_service.session_scope() as session:
            repository = ProductRepository(session)
            for record in records:
                try:
                    product = Product.model_validate(record)
                except ValidationError as e:
                    raise InvalidSeedDataError(f"Invalid product record: {e}") from e

                if repository.exists(product.id):
                    logger.warning("Rejecting seed: product {} already stored", product.id)
                    raise DuplicateProductError(product.id)

                repository.create(product)
                inserted += 1

        logger.info("Inserted {} products", inserted)
        return inserted

    async def initialize(self) -> int:
        """Fetch the feed and load it. No retries."""
        records = await self.fetch_seed_data()
        return await run_in_threadpool(self.insert_seed_data, records)
