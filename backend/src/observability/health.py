"""Health check utilities for the handoff service.

Provides health checks for the queue broker and the attachment cache.
"""

import time
from enum import Enum
from typing import Dict, Optional
from dataclasses import dataclass

import redis

from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Overall and per-component health."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Result of probing one shared resource."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


def check_broker_health(broker_url: str) -> ComponentHealth:
    """Check Redis broker connectivity.

    Non-Redis brokers are reported as degraded since they are not probed.
    """
    if not broker_url.startswith(("redis://", "rediss://")):
        return ComponentHealth(status=HealthStatus.DEGRADED, message="Broker not probed")

    try:
        start = time.time()
        client = redis.Redis.from_url(broker_url, socket_connect_timeout=2, socket_timeout=2)
        client.ping()
        latency_ms = (time.time() - start) * 1000
        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Broker connection OK",
            latency_ms=round(latency_ms, 2),
        )
    except redis.RedisError as e:
        logger.error(f"Broker health check failed: {e}")
        return ComponentHealth(status=HealthStatus.UNHEALTHY, message=f"Broker error: {e}")


def check_content_store_health(content_store) -> ComponentHealth:
    """Check that the attachment cache bucket is reachable."""
    start = time.time()
    if content_store.bucket_exists():
        return ComponentHealth(
            status=HealthStatus.HEALTHY,
            message="Content store OK",
            latency_ms=round((time.time() - start) * 1000, 2),
        )
    return ComponentHealth(status=HealthStatus.UNHEALTHY, message="Content store bucket unreachable")


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Unhealthy if any component is unhealthy, degraded if any is degraded."""
    statuses = [component.status for component in components.values()]
    if HealthStatus.UNHEALTHY in statuses:
        return HealthStatus.UNHEALTHY
    if HealthStatus.DEGRADED in statuses:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY
