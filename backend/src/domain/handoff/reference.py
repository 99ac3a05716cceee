"""Providers for the backend reference id sent with the processed notification.

The imaging backend does not assign batch ids yet. Until it does, the worker
sends a configured placeholder; swap in a provider that returns the real id
once the assignment step exists.
"""

from abc import ABC, abstractmethod

from .models import WorkItem


class ReferenceIdProvider(ABC):

    @abstractmethod
    def reference_for(self, item: WorkItem) -> str:
        pass


class PlaceholderReferenceIdProvider(ReferenceIdProvider):
    """Returns the same configured placeholder for every work item."""

    def __init__(self, placeholder: str = "TBD"):
        self.placeholder = placeholder

    def reference_for(self, item: WorkItem) -> str:
        return self.placeholder
