"""Unit tests for the sidecar -> registration request mapping"""

from domain.handoff.metadata import DOCUMENT_DATA_FIELDS, DocumentData, parse_document_metadata
from domain.handoff.registration import (
    DocumentReleaseRequest,
    DocumentReleaseResponse,
    RegistrationRequest,
    RegistrationResponse,
    build_registration_request,
)


class TestBuildRegistrationRequest:

    def test_full_mapping_with_guid(self, metadata_xml):
        """Released document G1 with a complete sidecar maps field by field"""
        data = parse_document_metadata(metadata_xml).document_data

        request = build_registration_request(data, "G1")

        assert request.application_document_guid == "G1"
        for xml_name, attribute in DOCUMENT_DATA_FIELDS:
            assert getattr(request, attribute) == f"value-{xml_name}"

    def test_wire_names(self, metadata_xml):
        data = parse_document_metadata(metadata_xml).document_data
        wire = build_registration_request(data, "G1").to_wire()

        assert len(wire) == 41
        assert wire["applicationDocumentGuid"] == "G1"
        assert wire["scheduleType"] == "value-pvScheduleType"
        assert wire["paymentMethod"] == "value-pvApplicationPaymentMethod"
        assert wire["nonFinRejectReason"] == "value-pvApplicationNonFinRejectRsn"
        assert wire["applicationValidateUsername"] == "value-pvValidationUser"
        assert wire["applPartyId"] == "value-pnApplPartyId"
        assert wire["applGender"] == "value-pvApplGenderTxt"
        assert wire["applCity"] == "value-pvApplCityNm"
        assert wire["applOrgPartyId"] == "value-pnOrgPartyId"
        assert wire["applOrgContactPartyId"] == "value-pnOrgContactPartyId"

    def test_absent_fields_omitted_from_wire(self):
        data = DocumentData(appl_surname="Smith", appl_first_name="")

        wire = build_registration_request(data, None).to_wire()

        assert wire == {"applSurname": "Smith", "applFirstName": ""}

    def test_mapping_is_deterministic(self, metadata_xml):
        data = parse_document_metadata(metadata_xml).document_data
        assert build_registration_request(data, "G1") == build_registration_request(data, "G1")


class TestServiceModels:

    def test_release_request_wire(self):
        request = DocumentReleaseRequest(server="sftp.test", file_name="F1.PDF")
        assert request.model_dump(by_alias=True) == {"server": "sftp.test", "fileName": "F1.PDF"}

    def test_release_response(self):
        response = DocumentReleaseResponse.model_validate(
            {"respCode": 0, "respMsg": "ok", "guid": "G1", "extra": 1}
        )
        assert response.is_success is True
        assert response.guid == "G1"

    def test_release_response_failure(self):
        response = DocumentReleaseResponse.model_validate({"respCode": -1, "respMsg": "nope"})
        assert response.is_success is False
        assert response.guid is None

    def test_registration_response(self):
        assert RegistrationResponse.model_validate({"respCode": 0}).is_success is True
        assert RegistrationResponse.model_validate({"respCode": 2}).is_success is False

    def test_request_accepts_wire_names(self):
        request = RegistrationRequest.model_validate({"applSurname": "Smith"})
        assert request.appl_surname == "Smith"
