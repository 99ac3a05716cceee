"""Failure handling for queue workers.

A worker invocation that failed is handed to a FailureHandler, which applies
the configured policy:

- log: record the failure and consume the message
- retry: re-enqueue with exponential backoff, dead-letter once retries run out
- dead_letter: park the payload and error text on the dead-letter queue

Every dead-letter record carries the idempotency key of the unit of work
(transaction id for emails, file id for output notifications).
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from celery import Task

from observability.metrics import handoff_failures_total
from observability.work_context import WorkContext

logger = logging.getLogger(__name__)

DEAD_LETTER_TASK_NAME = "dps.dead_letter"

DeadLetterPublisher = Callable[[Dict[str, Any]], None]


class FailurePolicy(str, Enum):
    LOG = "log"
    RETRY = "retry"
    DEAD_LETTER = "dead_letter"


def retry_countdown(retries: int, backoff_seconds: int, backoff_max_seconds: int) -> int:
    """Seconds to wait before retry number ``retries + 1``.

    Example:
        >>> retry_countdown(0, 30, 3600)
        30
        >>> retry_countdown(3, 30, 3600)
        240
    """
    return min(backoff_seconds * (2 ** retries), backoff_max_seconds)


def build_dead_letter_record(
    task_name: str,
    payload: Mapping[str, Any],
    error: BaseException,
    idempotency_key: Optional[str],
    retries: int = 0,
) -> Dict[str, Any]:
    return {
        "task": task_name,
        "idempotencyKey": idempotency_key,
        "payload": dict(payload),
        "errorType": type(error).__name__,
        "error": str(error),
        "retries": retries,
        "failedAt": datetime.now(timezone.utc).isoformat(),
    }


def celery_dead_letter_publisher(app, queue_name: str) -> DeadLetterPublisher:
    """Publisher that sends dead-letter records as messages to ``queue_name``."""

    def publish(record: Dict[str, Any]) -> None:
        app.send_task(DEAD_LETTER_TASK_NAME, args=[record], queue=queue_name)

    return publish


class FailureHandler:
    """Applies a FailurePolicy to a failed worker invocation.

    Args:
        policy: Policy to apply
        publish_dead_letter: Callable receiving dead-letter records
        max_retries: Retries before a retried message is dead-lettered
        backoff_seconds: Base delay of the first retry
        backoff_max_seconds: Upper bound of the retry delay
    """

    def __init__(
        self,
        policy: FailurePolicy,
        publish_dead_letter: DeadLetterPublisher,
        max_retries: int = 5,
        backoff_seconds: int = 30,
        backoff_max_seconds: int = 3600,
    ):
        self.policy = FailurePolicy(policy)
        self.publish_dead_letter = publish_dead_letter
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self.backoff_max_seconds = backoff_max_seconds

    def handle(
        self,
        task: Task,
        worker: str,
        payload: Mapping[str, Any],
        error: BaseException,
        idempotency_key: Optional[str],
        context: Optional[WorkContext] = None,
        retryable: bool = True,
    ) -> str:
        """Apply the policy and return the action taken.

        Args:
            retryable: False when a retry cannot change the result; the
                retry policy then dead-letters immediately

        Returns:
            str: "logged" or "dead_lettered"

        Raises:
            celery.exceptions.Retry: When the message is scheduled for retry
        """
        extra = (context or WorkContext()).log_extra()
        retries = task.request.retries or 0
        handoff_failures_total.labels(
            worker=worker, error_type=type(error).__name__, policy=self.policy.value
        ).inc()

        if self.policy == FailurePolicy.LOG:
            logger.error(f"{task.name} failed, message consumed: {error}", extra=extra)
            return "logged"

        if self.policy == FailurePolicy.RETRY and retryable and retries < self.max_retries:
            countdown = retry_countdown(retries, self.backoff_seconds, self.backoff_max_seconds)
            logger.warning(
                f"{task.name} failed (attempt {retries + 1}/{self.max_retries + 1}), "
                f"retrying in {countdown}s: {error}",
                extra=extra,
            )
            raise task.retry(exc=error, countdown=countdown, max_retries=self.max_retries)

        record = build_dead_letter_record(task.name, payload, error, idempotency_key, retries)
        self.publish_dead_letter(record)
        logger.error(
            f"{task.name} failed after {retries} retries, dead-lettered {idempotency_key}: {error}",
            extra=extra,
        )
        return "dead_lettered"
