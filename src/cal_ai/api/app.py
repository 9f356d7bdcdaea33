"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cal_ai.api.foods import router as foods_router
from cal_ai.api.me import router as me_router
from cal_ai.api.users import router as users_router
from cal_ai.app_logging import configure_logging
from cal_ai.containers import AppContainer
from cal_ai.services.errors import ExternalServiceError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        state_container.scheduler.start()
        yield
        await state_container.scheduler.close()
        try:
            await state_container.close_resources()
        except Exception:
            logger.exception("Failed to close resources")
        state_container.registry.flush()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)
    app.include_router(me_router)
    app.include_router(foods_router)

    @app.exception_handler(ExternalServiceError)
    async def external_service_error(
        request: Request, exc: ExternalServiceError
    ) -> JSONResponse:
        logger.warning("External service error on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc), "retryable": True},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
