"""Port for the ORDS organization query service."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class OrganizationApiPort(ABC):
    """Raw organization queries. Responses are the service's JSON objects.

    Implementations raise CollaboratorCallError on any failure.
    """

    @abstractmethod
    def validate_org_draw_down_balance(
        self,
        jurisdiction_type: Optional[str],
        org_party_id: Optional[str],
        schedule_type: Optional[str],
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    def validate_org_party(
        self,
        org_city: Optional[str],
        org_party_id: Optional[str],
        org_subname_1: Optional[str],
        org_subname_2: Optional[str],
        org_subname_3: Optional[str],
        org_subname_4: Optional[str],
        org_subname_5: Optional[str],
    ) -> Dict[str, Any]:
        pass
