"""DPS Handoff Service - FastAPI application

Serves the synchronous side of the document handoff pipeline:
- PUT /emails/{id}/processed and /processFailed (mailbox state)
- SOAP registration web service (organization validation)
- /health, /ready and /metrics

Queue consumers run as Celery workers (workers.celery_app), not in this process.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import get_settings
from mailbox_state.router import router as mailbox_state_router
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router
from registration.router import router as registration_router

settings = get_settings()
configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)

_docs_enabled = settings.ENVIRONMENT != "production"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Adapters open their connections per call; only the lifecycle is logged."""
    logger.info(f"DPS handoff API started (environment={settings.ENVIRONMENT}, debug={settings.DEBUG})")
    yield
    logger.info("DPS handoff API stopped")


app = FastAPI(
    title="DPS Handoff API",
    description="Mailbox state and registration services of the DPS document handoff pipeline",
    version="0.1.0",
    docs_url="/docs" if _docs_enabled else None,
    redoc_url="/redoc" if _docs_enabled else None,
    openapi_url="/openapi.json" if _docs_enabled else None,
    lifespan=lifespan,
)

# Outermost so every log line of a request carries its request id
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 with the field errors, e.g. a mailbox request without correlationId."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "message": "Request body or parameters are invalid",
            "details": exc.errors(),
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "message": "Internal server error"},
    )


app.include_router(observability_router)
app.include_router(mailbox_state_router)
app.include_router(registration_router)


@app.get("/", include_in_schema=False)
async def root() -> dict:
    return {
        "name": "DPS Handoff API",
        "version": app.version,
        "docs": app.docs_url,
    }


def create_app() -> FastAPI:
    """Return the configured application (used by tests and ASGI servers)."""
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
