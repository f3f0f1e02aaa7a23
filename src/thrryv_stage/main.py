# src/thrryv_stage/main.py
"""Main entry point for the Thrryv application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from thrryv_stage.api.v1 import (
    admin_router,
    evaluation_router,
    moderation_router,
    posts_router,
    replies_router,
    reputation_router,
    users_router,
)
from thrryv_stage.core.errors import ThrryvError
from thrryv_stage.core.settings import settings
from thrryv_stage.db.session import SessionLocal
from thrryv_stage.services.ai_client import AIClient
from thrryv_stage.services.reputation_worker import ReputationRecomputeWorker

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Own the AI client and the recompute worker for the app's lifetime."""
    app.state.ai_client = AIClient()
    worker = ReputationRecomputeWorker(SessionLocal)
    await worker.start()
    app.state.reputation_worker = worker
    if not app.state.ai_client.enabled:
        logger.warning("EVALUATOR_API_KEY is not set; content evaluation is unavailable")
    try:
        yield
    finally:
        await worker.stop()
        await app.state.ai_client.close()


# Initialize FastAPI app
app = FastAPI(
    title="Thrryv API",
    description="Reputation scoring and moderation for a social content platform",
    version=settings.app_version,
    lifespan=lifespan,
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


@app.exception_handler(ThrryvError)
async def handle_thrryv_error(_request: Request, exc: ThrryvError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# Include API routers
app.include_router(evaluation_router, prefix="/api/v1")
app.include_router(reputation_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(replies_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Thrryv API",
        "version": settings.app_version,
        "description": "Reputation scoring and moderation for a social content platform",
        "docs": "/docs",
        "redoc": "/redoc"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("thrryv_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
