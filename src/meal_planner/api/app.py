"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.planner import router as planner_router
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import (
    InvalidInputError,
    PlannerError,
    PreconditionFailedError,
    ReferenceNotFoundError,
)

_ERROR_STATUS = {
    ReferenceNotFoundError: status.HTTP_404_NOT_FOUND,
    PreconditionFailedError: status.HTTP_409_CONFLICT,
    InvalidInputError: 422,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(planner_router)

    @app.exception_handler(PlannerError)
    async def planner_error_handler(
        request: Request, exc: PlannerError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info(
            "Planner request failed: %s %s -> %s: %s",
            request.method,
            request.url.path,
            status_code,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
