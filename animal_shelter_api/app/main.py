"""
Main entrypoint for the Animal Shelter API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn animal_shelter_api.app.main:app --reload

Service errors are mapped to plain-text responses: invalid input gives
400, an unknown carer gives 404 and anything else gives 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import CarerNotFoundError, InvalidArgumentError, StorageError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=400)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    # Malformed ids and bodies are reported the same way as rejected input.
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.error("Rejected request to %s: %s", request.url.path, details)
    return PlainTextResponse(f"Некорректный запрос: {details}", status_code=400)


async def not_found_handler(request: Request, exc: CarerNotFoundError) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=404)


async def server_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Internal server error", status_code=500)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the startup hook
    # and request handlers can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(v1_router, prefix=settings.api_prefix)

    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CarerNotFoundError, not_found_handler)
    app.add_exception_handler(StorageError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        init_db()

    return app


app = create_app()
