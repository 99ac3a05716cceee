"""Request and result types for organization validation.

Each operation returns exactly one of two variants, discriminated by
``status``: the success variant with the validation outcome, or the error
variant with only the error message. Callers never see a third state.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ValidateOrgDrawDownBalanceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    jurisdiction_type: Optional[str] = Field(None, alias="jurisdictionType")
    org_party_id: Optional[str] = Field(None, alias="orgPartyId")
    schedule_type: Optional[str] = Field(None, alias="scheduleType")


class ValidateOrgPartyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    org_city: Optional[str] = Field(None, alias="orgCity")
    org_party_id: Optional[str] = Field(None, alias="orgPartyId")
    org_subname_1: Optional[str] = Field(None, alias="orgSubname1")
    org_subname_2: Optional[str] = Field(None, alias="orgSubname2")
    org_subname_3: Optional[str] = Field(None, alias="orgSubname3")
    org_subname_4: Optional[str] = Field(None, alias="orgSubname4")
    org_subname_5: Optional[str] = Field(None, alias="orgSubname5")


class ContactPerson(BaseModel):
    """Normalized contact person of a validated organization"""
    name: Optional[str] = None
    role: Optional[str] = None
    party_id: Optional[str] = None


class DrawDownBalanceSuccess(BaseModel):
    status: Literal["success"] = "success"
    validation_result: Optional[str] = None
    status_code: Optional[str] = None
    status_message: Optional[str] = None


class OrgPartySuccess(BaseModel):
    status: Literal["success"] = "success"
    validation_result: Optional[str] = None
    status_code: Optional[str] = None
    status_message: Optional[str] = None
    found_org_party_id: Optional[str] = None
    found_org_name: Optional[str] = None
    found_org_type: Optional[str] = None
    contact_persons: List[ContactPerson] = Field(default_factory=list)


class ValidationFailure(BaseModel):
    status: Literal["error"] = "error"
    error_message: str


DrawDownBalanceResult = Union[DrawDownBalanceSuccess, ValidationFailure]
OrgPartyResult = Union[OrgPartySuccess, ValidationFailure]
