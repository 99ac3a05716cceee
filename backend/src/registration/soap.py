"""SOAP 1.1 envelope handling for the registration web service.

Requests are matched on element local names, so clients may qualify the
operation and its fields with any namespace. Responses carry unqualified
elements inside a standard SOAP 1.1 envelope.
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError

from domain.organization.models import (
    ContactPerson,
    ValidateOrgDrawDownBalanceRequest,
    ValidateOrgPartyRequest,
)
from domain.organization.service import OrganizationService

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_CONTENT_TYPE = "text/xml; charset=utf-8"

ET.register_namespace("soap", SOAP_ENV_NS)

# operation -> (request model, OrganizationService method)
OPERATIONS = {
    "validateOrgDrawDownBalance": (ValidateOrgDrawDownBalanceRequest, "validate_org_draw_down_balance"),
    "validateOrgParty": (ValidateOrgPartyRequest, "validate_org_party"),
}

# result attribute -> response element
RESULT_ELEMENTS = (
    ("status", "status"),
    ("validation_result", "validationResult"),
    ("status_code", "statusCode"),
    ("status_message", "statusMessage"),
    ("found_org_party_id", "foundOrgPartyId"),
    ("found_org_name", "foundOrgName"),
    ("found_org_type", "foundOrgType"),
    ("error_message", "errorMessage"),
)

CONTACT_ELEMENTS = (
    ("name", "contactPersonName"),
    ("role", "contactPersonRole"),
    ("party_id", "contactPersonPartyId"),
)


class SoapFault(Exception):
    """Request that is answered with a SOAP Fault.

    Attributes:
        code: Fault code, "Client" for bad requests and "Server" otherwise
    """

    def __init__(self, message: str, code: str = "Client"):
        self.code = code
        super().__init__(message)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_envelope(content: bytes) -> Tuple[str, Dict[str, Optional[str]]]:
    """Extract the operation name and its scalar fields from a SOAP envelope.

    Raises:
        SoapFault: If the envelope is malformed or has an empty body
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise SoapFault(f"Malformed SOAP envelope: {e}")

    if root.tag != f"{{{SOAP_ENV_NS}}}Envelope":
        raise SoapFault(f"Expected SOAP 1.1 Envelope, got '{root.tag}'")

    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    if body is None or len(body) == 0:
        raise SoapFault("SOAP Body is missing or empty")

    operation = body[0]
    fields = {_local_name(child.tag): child.text for child in operation}
    return _local_name(operation.tag), fields


def dispatch(service: OrganizationService, operation: str, fields: Dict[str, Optional[str]]) -> BaseModel:
    """Call the OrganizationService method behind a SOAP operation.

    Raises:
        SoapFault: If the operation is unknown or its fields are invalid
    """
    if operation not in OPERATIONS:
        raise SoapFault(f"Unknown operation '{operation}'")

    request_model, method_name = OPERATIONS[operation]
    try:
        request = request_model.model_validate(fields)
    except ValidationError as e:
        raise SoapFault(f"Invalid {operation} request: {e}")

    return getattr(service, method_name)(request)


def _envelope() -> Tuple[ET.Element, ET.Element]:
    envelope = ET.Element(f"{{{SOAP_ENV_NS}}}Envelope")
    body = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    return envelope, body


def _text_element(parent: ET.Element, tag: str, value: Any) -> None:
    ET.SubElement(parent, tag).text = str(value)


def _contacts_element(parent: ET.Element, contacts: List[ContactPerson]) -> None:
    container = ET.SubElement(parent, "contactPersons")
    for contact in contacts:
        element = ET.SubElement(container, "contactPerson")
        for attribute, tag in CONTACT_ELEMENTS:
            value = getattr(contact, attribute)
            if value is not None:
                _text_element(element, tag, value)


def build_response(operation: str, result: BaseModel) -> bytes:
    """Serialize a validation result as ``<{operation}Response>``.

    Fields that are None are left out.
    """
    envelope, body = _envelope()
    response = ET.SubElement(body, f"{operation}Response")

    for attribute, tag in RESULT_ELEMENTS:
        value = getattr(result, attribute, None)
        if value is not None:
            _text_element(response, tag, value)

    contacts = getattr(result, "contact_persons", None)
    if contacts is not None:
        _contacts_element(response, contacts)

    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)


def build_fault(fault: SoapFault) -> bytes:
    envelope, body = _envelope()
    element = ET.SubElement(body, f"{{{SOAP_ENV_NS}}}Fault")
    _text_element(element, "faultcode", f"soap:{fault.code}")
    _text_element(element, "faultstring", str(fault))
    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)
