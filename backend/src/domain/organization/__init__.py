"""Organization domain - validation facade over the ORDS organization API"""

from .models import (
    ContactPerson,
    DrawDownBalanceSuccess,
    OrgPartySuccess,
    ValidationFailure,
    ValidateOrgDrawDownBalanceRequest,
    ValidateOrgPartyRequest,
)
from .ports import OrganizationApiPort
from .service import OrganizationService

__all__ = [
    "ContactPerson",
    "DrawDownBalanceSuccess",
    "OrgPartySuccess",
    "ValidationFailure",
    "ValidateOrgDrawDownBalanceRequest",
    "ValidateOrgPartyRequest",
    "OrganizationApiPort",
    "OrganizationService",
]
