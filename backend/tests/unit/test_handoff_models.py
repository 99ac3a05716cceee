"""Unit tests for handoff work items and release file naming"""

import base64
from uuid import UUID

import pytest

from domain.handoff.models import (
    InboundFileInfo,
    ReleaseFileInfo,
    ReleaseNotice,
    WorkItem,
    decode_mailbox_id,
    encode_mailbox_id,
)


class TestMailboxIdEncoding:
    """Test base64 mailbox id encoding/decoding"""

    @pytest.mark.parametrize("email_id", ["case1", "<AAMkAD==@mail.example>", "ümlaut-id"])
    def test_round_trip(self, email_id):
        assert decode_mailbox_id(encode_mailbox_id(email_id)) == email_id

    def test_encoding_is_url_safe(self):
        encoded = encode_mailbox_id("\xff\xfe\xfd??>>")
        assert "+" not in encoded
        assert "/" not in encoded

    def test_decodes_standard_alphabet(self):
        raw = "id with ?? and >>"
        standard = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        assert decode_mailbox_id(standard) == raw

    def test_decodes_without_padding(self):
        encoded = encode_mailbox_id("case1").rstrip("=")
        assert decode_mailbox_id(encoded) == "case1"

    @pytest.mark.parametrize("value", ["", "   ", "not base64!", "a"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(ValueError):
            decode_mailbox_id(value)

    def test_non_utf8_bytes_raise(self):
        encoded = base64.urlsafe_b64encode(b"\xff\xfe").decode("ascii")
        with pytest.raises(ValueError):
            decode_mailbox_id(encoded)


class TestWorkItem:
    """Test WorkItem construction from queue payloads"""

    def test_from_email_id_encodes(self, work_item):
        assert work_item.mailbox_id_base64 == encode_mailbox_id("case1")
        assert work_item.email_id == "case1"

    def test_payload_round_trip(self, work_item):
        assert WorkItem.from_payload(work_item.to_payload()) == work_item

    def test_from_payload_fields(self):
        item = WorkItem.from_payload(
            {
                "transactionId": "3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b",
                "correlationId": "corr-9",
                "fileInfo": {"id": "c-1", "name": "scan.pdf"},
                "base64EmailId": "Y2FzZTE=",
            }
        )
        assert item.transaction_id == UUID("3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b")
        assert item.correlation_id == "corr-9"
        assert item.file_info == InboundFileInfo(id="c-1", name="scan.pdf")
        assert item.email_id == "case1"

    def test_from_payload_missing_file_info(self):
        with pytest.raises(ValueError):
            WorkItem.from_payload({"transactionId": "3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b"})

    def test_from_payload_bad_transaction_id(self):
        with pytest.raises(ValueError):
            WorkItem.from_payload(
                {
                    "transactionId": "not-a-uuid",
                    "fileInfo": {"id": "c-1", "name": "scan.pdf"},
                    "base64EmailId": "Y2FzZTE=",
                }
            )

    def test_work_item_is_frozen(self, work_item):
        with pytest.raises(AttributeError):
            work_item.correlation_id = "other"


class TestReleaseNotice:

    def test_from_payload(self):
        notice = ReleaseNotice.from_payload({"fileId": "F1", "businessAreaCd": "DPS"})
        assert notice == ReleaseNotice(file_id="F1", business_area_cd="DPS")

    def test_missing_file_id(self):
        with pytest.raises(ValueError):
            ReleaseNotice.from_payload({"businessAreaCd": "DPS"})


class TestReleaseFileInfo:
    """Test release file names and remote paths"""

    def test_names_derive_from_file_id(self):
        info = ReleaseFileInfo("F1", "PDF", "/dps")
        assert info.image_release_file_name == "F1.PDF"
        assert info.metadata_release_file_name == "F1.xml"

    def test_names_stable_across_instances(self):
        first = ReleaseFileInfo("F1", "PDF", "/dps")
        second = ReleaseFileInfo("F1", "PDF", "/dps")
        assert first.release_file_names() == second.release_file_names()

    def test_paths(self):
        info = ReleaseFileInfo("F1", "PDF", "/dps/")
        assert info.image_release_path == "/dps/F1.PDF"
        assert info.metadata_release_path == "/dps/F1.xml"
        assert info.archive_path("F1.xml") == "/dps/archive/F1.xml"
        assert info.error_path("F1.PDF") == "/dps/error/F1.PDF"
