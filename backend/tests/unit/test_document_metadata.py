"""Unit tests for the metadata sidecar parser"""

import pytest

from domain.handoff.errors import MetadataParseError
from domain.handoff.metadata import (
    DOCUMENT_DATA_FIELDS,
    DocumentData,
    document_data_attributes,
    parse_document_metadata,
)


class TestDocumentMetadataParser:

    def test_field_table_covers_document_data(self):
        assert len(DOCUMENT_DATA_FIELDS) == 40
        assert tuple(attr for _, attr in DOCUMENT_DATA_FIELDS) == document_data_attributes()

    def test_parses_all_fields(self, metadata_xml):
        data = parse_document_metadata(metadata_xml).document_data

        for xml_name, attribute in DOCUMENT_DATA_FIELDS:
            assert getattr(data, attribute) == f"value-{xml_name}"

    def test_absent_fields_are_none(self):
        xml = "<data><documentData><pvApplSurname>Smith</pvApplSurname></documentData></data>"
        data = parse_document_metadata(xml).document_data

        assert data.appl_surname == "Smith"
        assert data.appl_first_name is None
        assert data.org_party_id is None

    def test_empty_element_is_empty_string(self):
        xml = "<data><documentData><pvApplSurname/></documentData></data>"
        assert parse_document_metadata(xml).document_data.appl_surname == ""

    def test_missing_document_data_node(self):
        with pytest.raises(MetadataParseError, match="documentData"):
            parse_document_metadata("<data/>")

    def test_namespaced_elements(self):
        xml = (
            '<ns:data xmlns:ns="urn:kofax"><ns:documentData>'
            "<ns:pnApplPartyId>42</ns:pnApplPartyId>"
            "</ns:documentData></ns:data>"
        )
        assert parse_document_metadata(xml).document_data.appl_party_id == "42"

    def test_unknown_elements_ignored(self):
        xml = "<data><documentData><somethingElse>x</somethingElse></documentData></data>"
        assert parse_document_metadata(xml).document_data == DocumentData()

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "not xml",
            "<data><documentData></data>",
            "<data><documentData><pvApplSurname>Smith</documentData></data>",
        ],
    )
    def test_malformed_xml_raises(self, content):
        with pytest.raises(MetadataParseError):
            parse_document_metadata(content)

    def test_wrong_root_raises(self):
        with pytest.raises(MetadataParseError, match="root"):
            parse_document_metadata("<documentData/>")
