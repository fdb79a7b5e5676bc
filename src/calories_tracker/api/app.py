"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from calories_tracker.api.auth import router as auth_router
from calories_tracker.api.request_models import AnalyzeRequest
from calories_tracker.app_logging import configure_logging
from calories_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting calories tracker: environment=%s model=%s",
            container.settings.environment,
            container.settings.openrouter_model,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/analyze")
    async def analyze(payload: AnalyzeRequest, request: Request) -> dict[str, object]:
        """Estimate calories for a meal photo.

        Error outcomes are returned with status 200; clients branch on the
        ``error`` field.
        """
        state_container: AppContainer = request.app.state.container
        outcome = await state_container.analysis_service.analyze(payload.image)
        return outcome.model_dump(by_alias=True, exclude_none=True)

    return app
