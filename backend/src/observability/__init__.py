"""Observability module for the handoff service.

Provides structured logging, explicit work context, metrics and health checks.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    handoff_messages_total,
    handoff_failures_total,
    release_status_total,
    mailbox_transitions_total,
    org_validations_total,
)
from .work_context import WorkContext, generate_request_id
from .health import HealthStatus, ComponentHealth

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "handoff_messages_total",
    "handoff_failures_total",
    "release_status_total",
    "mailbox_transitions_total",
    "org_validations_total",
    # Context
    "WorkContext",
    "generate_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
]
