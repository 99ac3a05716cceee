"""Parser for the XML metadata sidecar released with a rendered document.

The sidecar has a ``<data>`` root with one nested ``<documentData>`` node that
carries the captured form fields. Every field is optional here: an absent
element becomes None and an empty element becomes an empty string. Rejecting
incomplete data is left to the downstream registration service.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, fields
from typing import Optional, Tuple

from .errors import MetadataParseError

ROOT_TAG = "data"
DOCUMENT_DATA_TAG = "documentData"

# (xml element name, attribute name)
DOCUMENT_DATA_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("pvScheduleType", "schedule_type"),
    ("pvJurisdictionType", "jurisdiction_type"),
    ("pvProcessingStream", "processing_stream"),
    ("pvApplicationCategory", "application_category"),
    ("pvApplicationPaymentMethod", "application_payment_method"),
    ("pvApplicationNonFinRejectRsn", "application_non_fin_reject_rsn"),
    ("pvApplicationSignedYN", "application_signed_yn"),
    ("pvApplicationSignedDate", "application_signed_date"),
    ("pvApplicationGuardianSignedYN", "application_guardian_signed_yn"),
    ("pvApplicationPaymentId", "application_payment_id"),
    ("pvApplicationIncompleteReason", "application_incomplete_reason"),
    ("pvValidationUser", "validation_user"),
    ("pnApplPartyId", "appl_party_id"),
    ("pvApplSurname", "appl_surname"),
    ("pvApplFirstName", "appl_first_name"),
    ("pvApplSecondName", "appl_second_name"),
    ("pvApplBirthDate", "appl_birth_date"),
    ("pvApplGenderTxt", "appl_gender_txt"),
    ("pvApplBirthPlaceTxt", "appl_birth_place_txt"),
    ("pvApplAddlSurname1", "appl_addl_surname_1"),
    ("pvApplAddlFirstName1", "appl_addl_first_name_1"),
    ("pvApplAddlSecondName1", "appl_addl_second_name_1"),
    ("pvApplAddlSurname2", "appl_addl_surname_2"),
    ("pvApplAddlFirstName2", "appl_addl_first_name_2"),
    ("pvApplAddlSecondName2", "appl_addl_second_name_2"),
    ("pvApplAddlSurname3", "appl_addl_surname_3"),
    ("pvApplAddlFirstName3", "appl_addl_first_name_3"),
    ("pvApplAddlSecondName3", "appl_addl_second_name_3"),
    ("pvApplStreetAddress", "appl_street_address"),
    ("pvApplCityNm", "appl_city_nm"),
    ("pvApplProvinceNm", "appl_province_nm"),
    ("pvApplCountryNm", "appl_country_nm"),
    ("pvApplPostalCode", "appl_postal_code"),
    ("pvApplDriversLicence", "appl_drivers_licence"),
    ("pvApplPhoneNumber", "appl_phone_number"),
    ("pvApplEmailAddress", "appl_email_address"),
    ("pnOrgPartyId", "org_party_id"),
    ("pnOrgFacilityPartyId", "org_facility_party_id"),
    ("pvOrgFacilityName", "org_facility_name"),
    ("pnOrgContactPartyId", "org_contact_party_id"),
)


@dataclass(frozen=True)
class DocumentData:
    """Captured form fields of a released document."""
    schedule_type: Optional[str] = None
    jurisdiction_type: Optional[str] = None
    processing_stream: Optional[str] = None
    application_category: Optional[str] = None
    application_payment_method: Optional[str] = None
    application_non_fin_reject_rsn: Optional[str] = None
    application_signed_yn: Optional[str] = None
    application_signed_date: Optional[str] = None
    application_guardian_signed_yn: Optional[str] = None
    application_payment_id: Optional[str] = None
    application_incomplete_reason: Optional[str] = None
    validation_user: Optional[str] = None
    appl_party_id: Optional[str] = None
    appl_surname: Optional[str] = None
    appl_first_name: Optional[str] = None
    appl_second_name: Optional[str] = None
    appl_birth_date: Optional[str] = None
    appl_gender_txt: Optional[str] = None
    appl_birth_place_txt: Optional[str] = None
    appl_addl_surname_1: Optional[str] = None
    appl_addl_first_name_1: Optional[str] = None
    appl_addl_second_name_1: Optional[str] = None
    appl_addl_surname_2: Optional[str] = None
    appl_addl_first_name_2: Optional[str] = None
    appl_addl_second_name_2: Optional[str] = None
    appl_addl_surname_3: Optional[str] = None
    appl_addl_first_name_3: Optional[str] = None
    appl_addl_second_name_3: Optional[str] = None
    appl_street_address: Optional[str] = None
    appl_city_nm: Optional[str] = None
    appl_province_nm: Optional[str] = None
    appl_country_nm: Optional[str] = None
    appl_postal_code: Optional[str] = None
    appl_drivers_licence: Optional[str] = None
    appl_phone_number: Optional[str] = None
    appl_email_address: Optional[str] = None
    org_party_id: Optional[str] = None
    org_facility_party_id: Optional[str] = None
    org_facility_name: Optional[str] = None
    org_contact_party_id: Optional[str] = None


@dataclass(frozen=True)
class DocumentMetadata:
    """Parsed metadata sidecar."""
    document_data: DocumentData


def _local_name(tag: str) -> str:
    # Drop the "{namespace}" prefix ElementTree puts on qualified tags
    return tag.rsplit("}", 1)[-1]


def _find_child(parent: ET.Element, name: str) -> Optional[ET.Element]:
    for child in parent:
        if _local_name(child.tag) == name:
            return child
    return None


def parse_document_metadata(content: str) -> DocumentMetadata:
    """Parse metadata sidecar text.

    Args:
        content: XML text (already decoded from UTF-8)

    Returns:
        DocumentMetadata: Parsed fields, missing ones as None

    Raises:
        MetadataParseError: If the text is not well-formed XML, the root
            element is not ``<data>`` or it has no ``<documentData>`` child
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise MetadataParseError(f"Malformed metadata XML: {e}")

    if _local_name(root.tag) != ROOT_TAG:
        raise MetadataParseError(
            f"Unexpected metadata root element '{_local_name(root.tag)}', expected '{ROOT_TAG}'"
        )

    node = _find_child(root, DOCUMENT_DATA_TAG)
    if node is None:
        raise MetadataParseError(f"Metadata has no <{DOCUMENT_DATA_TAG}> element")

    values = {}
    for xml_name, attribute in DOCUMENT_DATA_FIELDS:
        element = _find_child(node, xml_name)
        if element is not None:
            values[attribute] = element.text or ""

    return DocumentMetadata(document_data=DocumentData(**values))


def document_data_attributes() -> Tuple[str, ...]:
    return tuple(f.name for f in fields(DocumentData))
