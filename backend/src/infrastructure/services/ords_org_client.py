"""Client for the ORDS organization validation API."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from domain.handoff.errors import CollaboratorCallError
from domain.organization.ports import OrganizationApiPort

from .http import HttpServiceClient


def _params(**values: Optional[str]) -> Dict[str, str]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass
class OrdsOrgApiClient(HttpServiceClient, OrganizationApiPort):

    def _get_object(self, path: str, params: Dict[str, str]) -> Dict[str, Any]:
        payload = self._request_json("GET", path, params=params)
        if not isinstance(payload, dict):
            raise CollaboratorCallError(f"Unexpected response from {path}: expected an object")
        return payload

    def validate_org_draw_down_balance(
        self,
        jurisdiction_type: Optional[str],
        org_party_id: Optional[str],
        schedule_type: Optional[str],
    ) -> Dict[str, Any]:
        return self._get_object(
            "/org/drawdownbalance",
            _params(
                jurisdictionType=jurisdiction_type,
                orgPartyId=org_party_id,
                scheduleType=schedule_type,
            ),
        )

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
        return self._get_object(
            "/org/party",
            _params(
                orgCity=org_city,
                orgPartyId=org_party_id,
                orgSubname1=org_subname_1,
                orgSubname2=org_subname_2,
                orgSubname3=org_subname_3,
                orgSubname4=org_subname_4,
                orgSubname5=org_subname_5,
            ),
        )
