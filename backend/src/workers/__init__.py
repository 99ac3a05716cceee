"""Background workers for the document handoff pipeline.

Two Celery tasks, one per queue:
- dps.email.handoff: email attachment -> SFTP drop -> processed notification
- dps.output.notification: release -> metadata sidecar -> registration

Failed invocations are handed to the configured failure policy
(see failure_policy.FailurePolicy).
"""

from .base import HandoffTask
from .failure_policy import FailureHandler, FailurePolicy, retry_countdown

__all__ = [
    "HandoffTask",
    "FailureHandler",
    "FailurePolicy",
    "retry_countdown",
]
