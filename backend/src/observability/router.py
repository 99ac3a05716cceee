"""Observability API endpoints.

Prometheus exposition, component health and a readiness probe.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from config import Settings, get_settings
from dependencies import get_content_store
from .health import (
    check_broker_health,
    check_content_store_health,
    get_overall_health,
    HealthStatus,
)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get(
    "/health",
    summary="Component health",
    description="Returns health status of the queue broker and the attachment cache",
)
def health_check(
    settings: Settings = Depends(get_settings),
    content_store=Depends(get_content_store),
):
    """Check health of the pipeline's shared resources.

    Returns 200 OK unless a component is unhealthy, then 503.
    """
    components = {
        "broker": check_broker_health(settings.CELERY_BROKER_URL),
        "content_store": check_content_store_health(content_store),
    }
    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        }
    }
    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503

    return JSONResponse(content=response_data, status_code=status_code)


@router.get("/ready", summary="Readiness check endpoint")
def readiness_check():
    """The HTTP facades hold no startup state, so the process is ready once it answers."""
    return {"status": "ready"}
