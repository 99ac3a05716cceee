"""Prometheus metrics for the handoff pipeline.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter

# Queue worker metrics
handoff_messages_total = Counter(
    "dps_handoff_messages_total",
    "Total queue messages handled by the handoff workers",
    ["worker", "outcome"]  # worker: email|notification, outcome: success|failed|skipped
)

handoff_failures_total = Counter(
    "dps_handoff_failures_total",
    "Failed handoff invocations by error type and applied policy",
    ["worker", "error_type", "policy"]
)

release_status_total = Counter(
    "dps_release_status_total",
    "Final release status reached per output notification",
    ["status"]  # PENDING|RELEASED|ARCHIVED|ERRORED
)

# HTTP facade metrics
mailbox_transitions_total = Counter(
    "dps_mailbox_transitions_total",
    "Mailbox state transitions requested over HTTP",
    ["operation", "acknowledge"]  # operation: processed|failed
)

org_validations_total = Counter(
    "dps_org_validations_total",
    "Organization validation calls",
    ["operation", "status"]  # status: success|error
)
