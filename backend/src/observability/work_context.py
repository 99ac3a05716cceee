"""Explicit correlation context for log statements and collaborator calls.

A WorkContext is created at the start of each worker invocation or HTTP
request and handed down explicitly; nothing is stored in thread-local or
context-variable state.
"""

import uuid
from dataclasses import dataclass, replace
from typing import Dict, Optional


def generate_request_id() -> str:
    """Generate a new unique request ID.

    Returns:
        str: UUID v4 request ID
    """
    return str(uuid.uuid4())


@dataclass(frozen=True)
class WorkContext:
    """Identifiers tying log lines and side effects of one unit of work together."""
    correlation_id: Optional[str] = None
    transaction_id: Optional[str] = None
    file_id: Optional[str] = None
    business_area_cd: Optional[str] = None
    request_id: Optional[str] = None

    def log_extra(self) -> Dict[str, str]:
        """Fields for ``logger.info(..., extra=ctx.log_extra())``."""
        return {
            key: value
            for key, value in (
                ("correlation_id", self.correlation_id),
                ("transaction_id", self.transaction_id),
                ("file_id", self.file_id),
                ("business_area_cd", self.business_area_cd),
                ("request_id", self.request_id),
            )
            if value
        }

    def with_correlation(self, correlation_id: str) -> "WorkContext":
        return replace(self, correlation_id=correlation_id)
