"""ReleaseStatus state machine for released documents on the imaging drop

State flow:
PENDING → RELEASED → ARCHIVED or ERRORED
PENDING → ERRORED (document moved aside without a successful release)
"""

from enum import Enum
from typing import Dict, List


class ReleaseStatus(str, Enum):
    """Lifecycle of a rendered document waiting on the SFTP drop"""
    PENDING = "PENDING"      # Not released yet, files left in place
    RELEASED = "RELEASED"    # Release service returned success
    ARCHIVED = "ARCHIVED"    # Registered downstream, files moved to archive (terminal)
    ERRORED = "ERRORED"      # Registration or retrieval failed, files moved to error (terminal)


ALLOWED_TRANSITIONS: Dict[ReleaseStatus, List[ReleaseStatus]] = {
    ReleaseStatus.PENDING: [ReleaseStatus.RELEASED, ReleaseStatus.ERRORED],
    ReleaseStatus.RELEASED: [ReleaseStatus.ARCHIVED, ReleaseStatus.ERRORED],
    ReleaseStatus.ARCHIVED: [],
    ReleaseStatus.ERRORED: [],
}


def can_transition(from_status: ReleaseStatus, to_status: ReleaseStatus) -> bool:
    """Validate if status transition is allowed

    Example:
        >>> can_transition(ReleaseStatus.PENDING, ReleaseStatus.RELEASED)
        True
        >>> can_transition(ReleaseStatus.ARCHIVED, ReleaseStatus.ERRORED)
        False
    """
    return to_status in ALLOWED_TRANSITIONS.get(from_status, [])


def transition(from_status: ReleaseStatus, to_status: ReleaseStatus) -> ReleaseStatus:
    """Return the new status, refusing transitions the lifecycle does not allow

    Raises:
        ValueError: If the transition is not allowed
    """
    if not can_transition(from_status, to_status):
        raise ValueError(
            f"Cannot transition release from {from_status.value} to {to_status.value}"
        )
    return to_status


def is_terminal(status: ReleaseStatus) -> bool:
    return not ALLOWED_TRANSITIONS.get(status)
