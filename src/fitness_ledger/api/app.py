"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_ledger.api.backup import router as backup_router
from fitness_ledger.api.entries import router as entries_router
from fitness_ledger.api.goals import router as goals_router
from fitness_ledger.api.stats import router as stats_router
from fitness_ledger.app_logging import configure_logging
from fitness_ledger.containers import AppContainer
from fitness_ledger.domain.errors import (
    MalformedImport,
    PersistenceFailure,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fitness Ledger")
    app.state.container = container

    app.include_router(entries_router)
    app.include_router(goals_router)
    app.include_router(stats_router)
    app.include_router(backup_router)

    @app.exception_handler(ValidationError)
    async def validation_failed(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=422, content={"errors": exc.errors})

    @app.exception_handler(MalformedImport)
    async def malformed_import(
        _request: Request, exc: MalformedImport
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.exception_handler(PersistenceFailure)
    async def persistence_failed(
        _request: Request, exc: PersistenceFailure
    ) -> JSONResponse:
        logger.error("Storage write failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage is unavailable, nothing was saved"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
