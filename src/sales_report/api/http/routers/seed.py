"""Seed data endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from src.sales_report.api.http.deps import get_seed_service
from src.sales_report.core.services import SeedService

router = APIRouter(tags=["seed"])


@router.get("/initialize-database")
async def initialize_database(
    seed_service: SeedService = Depends(get_seed_service),
) -> dict[str, str]:
    """Load the remote product feed into the store in one transaction."""
    try:
        inserted = await seed_service.initialize()
    except Exception as e:
        logger.exception("Seeding from {} failed", seed_service.source_url)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
        ) from e

    logger.info("Seeded {} products", inserted)
    return {"message": "Database initialized with seed data."}
