"""Celery application with one named queue per handoff worker."""

from celery import Celery
from celery.signals import setup_logging
from kombu import Queue

from config import get_settings
from observability.logging_config import configure_logging

settings = get_settings()

celery_app = Celery(
    "dps_handoff",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    # The dead-letter queue is declared on first publish and has no consumer
    task_queues=[
        Queue(settings.EMAIL_QUEUE_NAME),
        Queue(settings.NOTIFICATION_QUEUE_NAME),
    ],
    task_routes={
        "dps.email.handoff": {"queue": settings.EMAIL_QUEUE_NAME},
        "dps.output.notification": {"queue": settings.NOTIFICATION_QUEUE_NAME},
        "dps.dead_letter": {"queue": settings.DEAD_LETTER_QUEUE_NAME},
    },
)


@setup_logging.connect
def configure_worker_logging(**kwargs):
    """Install the service log handler in worker processes instead of Celery's."""
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)


# Import tasks so Celery registers them.
from . import email_worker, notification_worker  # noqa: E402,F401
