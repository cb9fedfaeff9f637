"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.sales_report.api.http.app_data import ApplicationDependencies
from src.sales_report.api.http.routers import health, reports, seed
from src.sales_report.api.utils.app_startup import configure_logging
from src.sales_report.core.services import (
    DbManageService,
    DbSessionService,
    ReportClient,
    SeedService,
)
from src.sales_report.runtime.context import get_config

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Sales Report API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown"]


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Router registration ---
app.include_router(health.router)
app.include_router(seed.router)
app.include_router(reports.router)


def build_dependencies() -> ApplicationDependencies:
    """Wire the services the routers depend on from the current configuration."""
    config = get_config()
    database_service = DbSessionService()
    return ApplicationDependencies(
        database_service=database_service,
        seed_service=SeedService(
            database_service,
            source_url=config.seed.source_url,
            timeout=config.seed.timeout_seconds,
        ),
        report_client=ReportClient(
            base_url=config.reports_base_url,
            timeout=config.reports.timeout_seconds,
        ),
    )


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    deps = build_dependencies()
    DbManageService(deps.database_service.engine).create_all()
    app.state.app_dependencies = deps


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
