# src/inkwell/main.py
"""Main entry point for the Inkwell application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from inkwell.api.v1 import posts_router, profiles_router
from inkwell.core.errors import ServiceError, SourceUnavailableError
from inkwell.core.settings import settings
from inkwell.db.session import Database

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Blogging and social graph API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render domain errors with their stable code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report store failures that escaped the service layer as unavailability."""
    logger.error("Unhandled storage error on %s %s: %s", request.method, request.url.path, exc)
    error = SourceUnavailableError("The data source is unavailable")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    database = Database(settings.database_url, echo=settings.sql_debug)
    if settings.create_tables:
        database.create_tables()
    app.state.database = database
    logger.info("Started %s %s", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    database: Database | None = getattr(app.state, "database", None)
    if database:
        database.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Blogging and social graph API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inkwell.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
