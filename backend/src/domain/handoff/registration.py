"""Request/response models for the document release and registration services.

The registration request carries the sidecar fields renamed one-to-one to the
downstream wire names, plus the document GUID returned by the release call.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .metadata import DOCUMENT_DATA_FIELDS, DocumentData

SUCCESS_CODE = 0


class DocumentReleaseRequest(BaseModel):
    """Ask the imaging backend to release a rendered document"""
    model_config = ConfigDict(populate_by_name=True)

    server: str = Field(..., description="SFTP host holding the release files")
    file_name: str = Field(..., alias="fileName", description="Image release file name")


class DocumentReleaseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resp_code: int = Field(..., alias="respCode")
    resp_msg: Optional[str] = Field(None, alias="respMsg")
    guid: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.resp_code == SUCCESS_CODE


class RegistrationRequest(BaseModel):
    """Registration payload for the case-management system (Figaro)"""
    model_config = ConfigDict(populate_by_name=True)

    schedule_type: Optional[str] = Field(None, alias="scheduleType")
    jurisdiction_type: Optional[str] = Field(None, alias="jurisdictionType")
    processing_stream: Optional[str] = Field(None, alias="processingStream")
    application_category: Optional[str] = Field(None, alias="applicationCategory")
    application_payment_method: Optional[str] = Field(None, alias="paymentMethod")
    application_non_fin_reject_rsn: Optional[str] = Field(None, alias="nonFinRejectReason")
    application_signed_yn: Optional[str] = Field(None, alias="applicationSignedYn")
    application_signed_date: Optional[str] = Field(None, alias="applicationSignedDate")
    application_guardian_signed_yn: Optional[str] = Field(None, alias="applicationGuardianSignedYn")
    application_payment_id: Optional[str] = Field(None, alias="applicationPaymentId")
    application_incomplete_reason: Optional[str] = Field(None, alias="applicationIncompleteReason")
    validation_user: Optional[str] = Field(None, alias="applicationValidateUsername")
    application_document_guid: Optional[str] = Field(None, alias="applicationDocumentGuid")
    appl_party_id: Optional[str] = Field(None, alias="applPartyId")
    appl_surname: Optional[str] = Field(None, alias="applSurname")
    appl_first_name: Optional[str] = Field(None, alias="applFirstName")
    appl_second_name: Optional[str] = Field(None, alias="applSecondName")
    appl_birth_date: Optional[str] = Field(None, alias="applBirthDate")
    appl_gender_txt: Optional[str] = Field(None, alias="applGender")
    appl_birth_place_txt: Optional[str] = Field(None, alias="applBirthPlace")
    appl_addl_surname_1: Optional[str] = Field(None, alias="applAddlSurname1")
    appl_addl_first_name_1: Optional[str] = Field(None, alias="applAddlFirstName1")
    appl_addl_second_name_1: Optional[str] = Field(None, alias="applAddlSecondName1")
    appl_addl_surname_2: Optional[str] = Field(None, alias="applAddlSurname2")
    appl_addl_first_name_2: Optional[str] = Field(None, alias="applAddlFirstName2")
    appl_addl_second_name_2: Optional[str] = Field(None, alias="applAddlSecondName2")
    appl_addl_surname_3: Optional[str] = Field(None, alias="applAddlSurname3")
    appl_addl_first_name_3: Optional[str] = Field(None, alias="applAddlFirstName3")
    appl_addl_second_name_3: Optional[str] = Field(None, alias="applAddlSecondName3")
    appl_street_address: Optional[str] = Field(None, alias="applStreetAddress")
    appl_city_nm: Optional[str] = Field(None, alias="applCity")
    appl_province_nm: Optional[str] = Field(None, alias="applProvince")
    appl_country_nm: Optional[str] = Field(None, alias="applCountry")
    appl_postal_code: Optional[str] = Field(None, alias="applPostalCode")
    appl_drivers_licence: Optional[str] = Field(None, alias="applDriversLicence")
    appl_phone_number: Optional[str] = Field(None, alias="applPhoneNumber")
    appl_email_address: Optional[str] = Field(None, alias="applEmailAddress")
    org_party_id: Optional[str] = Field(None, alias="applOrgPartyId")
    org_facility_party_id: Optional[str] = Field(None, alias="applOrgFacilityPartyId")
    org_facility_name: Optional[str] = Field(None, alias="applOrgFacilityName")
    org_contact_party_id: Optional[str] = Field(None, alias="applOrgContactPartyId")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with downstream names, leaving absent fields out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RegistrationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resp_code: int = Field(..., alias="respCode")
    resp_msg: Optional[str] = Field(None, alias="respMsg")

    @property
    def is_success(self) -> bool:
        return self.resp_code == SUCCESS_CODE


def build_registration_request(data: DocumentData, document_guid: Optional[str]) -> RegistrationRequest:
    """Map sidecar fields one-to-one onto a registration request.

    Values are copied as-is; a field missing from the sidecar stays None.
    """
    values = {attribute: getattr(data, attribute) for _, attribute in DOCUMENT_DATA_FIELDS}
    return RegistrationRequest(application_document_guid=document_guid, **values)
