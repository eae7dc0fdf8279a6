from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import settings
from .infrastructure.logging import configure_logging
from .presentation.api.dependencies import get_provider, get_runner
from .presentation.api.errors import register_error_handlers
from .presentation.api.v1 import (
    admin_certifications,
    approvals,
    bounties,
    catalog,
    certifications,
    health,
    reminders,
)
from .presentation.middleware import CorrelationIdMiddleware

configure_logging(settings.service_name, debug=settings.debug)

logger = structlog.get_logger()

V1_ROUTERS: list[APIRouter] = [
    catalog.router,
    certifications.router,
    bounties.router,
    admin_certifications.router,
    approvals.router,
    reminders.router,
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    provider = get_provider()
    store_kind = "memory" if provider.database is None else "postgresql"
    logger.info("Starting certification tracker", store=store_kind, version=__version__)

    if provider.database is not None:
        try:
            await provider.database.create_tables()
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Certification store unavailable at startup",
                error=str(e),
                error_type=type(e).__name__,
                db_host=settings.db_host,
                db_name=settings.db_name,
            )
            raise

    runner = get_runner() if settings.embedded_scheduler else None
    if runner is not None:
        runner.start()

    yield

    if runner is not None:
        runner.stop()
    await provider.close()
    logger.info("Certification tracker stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Certification Tracker API",
        description="Certification lifecycle, approvals, renewal reminders and bounties",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(CorrelationIdMiddleware)
    register_error_handlers(app)

    app.include_router(health.router)
    for router in V1_ROUTERS:
        app.include_router(router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    def root() -> dict:
        return {"service": settings.service_name, "version": __version__, "docs": "/docs"}

    return app


app = create_app()
