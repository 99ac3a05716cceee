"""Organization validation facade.

Forwards validation requests to the ORDS organization API and folds every
outcome into one of the two result variants.
"""

import logging
from typing import Any, Dict, List, Optional

from domain.handoff.errors import CollaboratorCallError

from .models import (
    ContactPerson,
    DrawDownBalanceResult,
    DrawDownBalanceSuccess,
    OrgPartyResult,
    OrgPartySuccess,
    ValidateOrgDrawDownBalanceRequest,
    ValidateOrgPartyRequest,
    ValidationFailure,
)
from .ports import OrganizationApiPort

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _contact_persons(raw: Optional[List[Dict[str, Any]]]) -> List[ContactPerson]:
    if not isinstance(raw, list):
        return []

    contacts = []
    for contact in raw:
        if not isinstance(contact, dict):
            logger.warning(f"Skipping malformed contact person entry: {contact!r}")
            continue
        contacts.append(
            ContactPerson(
                name=_as_text(contact.get("contactPersonName")),
                role=_as_text(contact.get("contactPersonRole")),
                party_id=_as_text(contact.get("contactPersonPartyId")),
            )
        )
    return contacts


class OrganizationService:
    """Validation facade over OrganizationApiPort.

    No exception crosses this boundary: collaborator failures become
    ValidationFailure results.
    """

    def __init__(self, org_api: OrganizationApiPort):
        self.org_api = org_api

    def validate_org_draw_down_balance(
        self, request: ValidateOrgDrawDownBalanceRequest
    ) -> DrawDownBalanceResult:
        try:
            response = self.org_api.validate_org_draw_down_balance(
                request.jurisdiction_type,
                request.org_party_id,
                request.schedule_type,
            )
        except CollaboratorCallError as e:
            logger.error(f"Organization service validateOrgDrawDownBalance failed: {e}")
            return ValidationFailure(error_message=str(e))

        return DrawDownBalanceSuccess(
            validation_result=_as_text(response.get("validationResult")),
            status_code=_as_text(response.get("statusCode")),
            status_message=_as_text(response.get("statusMessage")),
        )

    def validate_org_party(self, request: ValidateOrgPartyRequest) -> OrgPartyResult:
        try:
            response = self.org_api.validate_org_party(
                request.org_city,
                request.org_party_id,
                request.org_subname_1,
                request.org_subname_2,
                request.org_subname_3,
                request.org_subname_4,
                request.org_subname_5,
            )
        except CollaboratorCallError as e:
            logger.error(f"Organization service validateOrgParty failed: {e}")
            return ValidationFailure(error_message=str(e))

        return OrgPartySuccess(
            validation_result=_as_text(response.get("validationResult")),
            status_code=_as_text(response.get("statusCode")),
            status_message=_as_text(response.get("statusMessage")),
            found_org_party_id=_as_text(response.get("foundOrgPartyId")),
            found_org_name=_as_text(response.get("foundOrgName")),
            found_org_type=_as_text(response.get("foundOrgType")),
            contact_persons=_contact_persons(response.get("contactPersons")),
        )
