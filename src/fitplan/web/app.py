"""FastAPI application for the fitplan JSON API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..db.engine import get_db_path, init_db, seed_exercises
from ..errors import DomainEmptyError, PersistenceError, ValidationError
from ..services import PlanService, RecordService
from .routers import plans, profile, records, stats

logger = logging.getLogger(__name__)


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if db_path is None:
        db_path = get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: schema and built-in exercise library
        await init_db(db_path)
        await seed_exercises(db_path)
        yield

    app = FastAPI(
        title="fitplan",
        description="Workout plan generator and progress tracker",
        version=__version__,
        lifespan=lifespan,
    )

    # One service instance per app so per-user regeneration locks are shared
    app.state.db_path = db_path
    app.state.plan_service = PlanService(db_path)
    app.state.record_service = RecordService(db_path)

    app.include_router(profile.router)
    app.include_router(plans.router)
    app.include_router(records.router)
    app.include_router(stats.router)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"error": exc.message})

    @app.exception_handler(DomainEmptyError)
    async def domain_empty_handler(request: Request, exc: DomainEmptyError):
        return JSONResponse(status_code=409, content={"error": exc.message})

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error("Persistence failure on %s: %s %s", request.url.path, exc.message, exc.details)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
