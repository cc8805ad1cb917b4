"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kvshort import __version__
from .api import api_router, health_router
from .middleware.logging import LoggingMiddleware


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed path, query or body input as 400 instead of 422.

    Only location and message are returned. The raw input may be an owner
    key or a string that cannot be encoded as UTF-8.
    """
    detail = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(detail)},
    )


def create_app(
    store_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Key/value store instance
        service_instance: RecordStore instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="kvshort",
        description="URL shortener with owner keys and access counters",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Handles shared by every request task
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # Health first so /api/... is never taken for a slug
    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(api_router, tags=["Links"])

    return app
