"""Pytest fixtures shared by unit and integration tests.

Provides:
- sys.path setup so tests import top-level packages from backend/src
- Test settings (no network, broker or database needed)
- Sample queue payloads and metadata sidecar XML

Usage:
    def test_handoff(work_item, metadata_xml):
        ...
"""

import os
import sys
from pathlib import Path
from uuid import UUID

# Set environment variables BEFORE any imports to ensure they take effect
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("SFTP_HOST", "sftp.test")
os.environ.setdefault("SFTP_PASSWORD", "test-password")
os.environ.setdefault("SFTP_REMOTE_LOCATION", "/dps")
os.environ.setdefault("S3_ENDPOINT_URL", "")
os.environ.setdefault("S3_BUCKET_NAME", "test-dps-bucket")
os.environ.setdefault("FAILURE_POLICY", "log")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("ENVIRONMENT", "test")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest

from domain.handoff.metadata import DOCUMENT_DATA_FIELDS
from domain.handoff.models import InboundFileInfo, ReleaseNotice, WorkItem


TEST_TRANSACTION_ID = UUID("3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b")


@pytest.fixture
def work_item() -> WorkItem:
    """Inbound work item for mailbox message ``case1``."""
    return WorkItem.from_email_id(
        transaction_id=TEST_TRANSACTION_ID,
        correlation_id="corr-123",
        file_info=InboundFileInfo(id="content-1", name="attachment.pdf"),
        email_id="case1",
    )


@pytest.fixture
def email_payload(work_item) -> dict:
    return work_item.to_payload()


@pytest.fixture
def release_notice() -> ReleaseNotice:
    return ReleaseNotice(file_id="F1", business_area_cd="DPS")


def field_value(xml_name: str) -> str:
    """Distinct sample value per sidecar element."""
    return f"value-{xml_name}"


@pytest.fixture
def metadata_xml() -> str:
    """Sidecar carrying all 40 fields."""
    elements = "".join(
        f"<{xml_name}>{field_value(xml_name)}</{xml_name}>" for xml_name, _ in DOCUMENT_DATA_FIELDS
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><data><documentData>{elements}</documentData></data>'
