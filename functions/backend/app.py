"""
FastAPI application entry point for the REST API.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import get_settings
from backend.routes import router
from shared.errors import (
    HTTP_STATUS_CODES,
    AppError,
    ErrorKind,
    to_error_body,
    validation_error,
)

logger = logging.getLogger(__name__)


def _setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.kind == ErrorKind.INTERNAL:
            logger.error(
                "%s %s failed: %s (%r)",
                request.method,
                request.url.path,
                exc.message,
                exc.cause,
            )
        return JSONResponse(
            status_code=HTTP_STATUS_CODES[exc.kind], content=to_error_body(exc)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        error = validation_error("Validation error", details)
        return JSONResponse(status_code=400, content=to_error_body(error))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = AppError(ErrorKind.INTERNAL, "An unknown error occurred", cause=exc)
        return JSONResponse(status_code=500, content=to_error_body(error))


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Portfolio Backend", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _setup_exception_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()


def run() -> None:
    """Serves the API with uvicorn on the configured host and port."""
    settings = get_settings()
    logger.info("Server running on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
