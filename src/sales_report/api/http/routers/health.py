"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.sales_report.api.http.app_data import ApplicationDependencies
from src.sales_report.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is up. Checks no dependencies."""
    return {"status": "healthy", "service": "sales-report"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    db_healthy = app_deps.database_service.health_check()
    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": config.database.url.split(":", 1)[0],
            }
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
