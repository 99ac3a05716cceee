"""Base task class for the handoff workers.

Collaborators are stateless handles, so each task builds its worker object
and failure handler once per process, on first use, and reuses them for
every message.

Task Signature Pattern:
======================

Every handoff task takes the raw queue payload (a JSON object) and returns a
JSON-serializable result dict:

@shared_task(name="dps.example", base=ExampleTask, bind=True)
def example_task(self, payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        item = ExampleItem.from_payload(payload)
    except ValueError as e:
        return self.reject_payload("example", payload, e)

    outcome = self.worker.handle(item)
    if outcome.success:
        return outcome.to_dict()
    return self.handle_failure("example", payload, outcome)

Enqueueing Pattern:
==================

    handle_email_handoff.delay(item.to_payload())

The idempotency key of the unit of work travels inside the payload; nothing
is derived from global state in the worker process.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from celery import Task

from config import get_settings
from observability.work_context import WorkContext

from .failure_policy import FailureHandler, celery_dead_letter_publisher

logger = logging.getLogger(__name__)


class HandoffTask(Task):
    """Base Celery task for the handoff workers.

    Subclasses implement build_worker(); the worker is created lazily on the
    first call so importing the task module never touches the network.
    """

    abstract = True
    _worker = None
    _failure_handler: Optional[FailureHandler] = None

    def build_worker(self):
        raise NotImplementedError

    @property
    def worker(self):
        if self._worker is None:
            self._worker = self.build_worker()
        return self._worker

    @property
    def failure_handler(self) -> FailureHandler:
        if self._failure_handler is None:
            settings = get_settings()
            self._failure_handler = FailureHandler(
                policy=settings.FAILURE_POLICY,
                publish_dead_letter=celery_dead_letter_publisher(
                    self.app, settings.DEAD_LETTER_QUEUE_NAME
                ),
                max_retries=settings.MAX_RETRIES,
                backoff_seconds=settings.RETRY_BACKOFF_SECONDS,
                backoff_max_seconds=settings.RETRY_BACKOFF_MAX_SECONDS,
            )
        return self._failure_handler

    def handle_failure(
        self,
        worker_name: str,
        payload: Mapping[str, Any],
        outcome,
        idempotency_key: Optional[str],
        context: Optional[WorkContext] = None,
        retryable: bool = True,
    ) -> Dict[str, Any]:
        """Hand a failed outcome to the failure policy.

        Raises:
            celery.exceptions.Retry: When the policy schedules a retry
        """
        action = self.failure_handler.handle(
            self,
            worker_name,
            payload,
            outcome.error,
            idempotency_key,
            context=context,
            retryable=retryable,
        )
        result = outcome.to_dict()
        result["action"] = action
        return result

    def reject_payload(
        self,
        worker_name: str,
        payload: Any,
        error: ValueError,
        idempotency_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Handle a message that cannot be turned into a unit of work.

        Retrying cannot fix a malformed payload, so the retry policy
        dead-letters it straight away.
        """
        logger.error(f"{self.name} received malformed payload: {error}")
        record = payload if isinstance(payload, Mapping) else {"raw": payload}
        action = self.failure_handler.handle(
            self, worker_name, record, error, idempotency_key, retryable=False
        )
        return {"status": "rejected", "error": str(error), "action": action}
