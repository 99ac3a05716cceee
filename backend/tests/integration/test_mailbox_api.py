"""Integration tests for the mailbox state endpoints"""

import pytest
from unittest.mock import Mock

from dependencies import get_mailbox_state_service
from domain.handoff.errors import MailboxError
from mailbox_state.service import MailboxStateService
from main import app


@pytest.fixture
def mover():
    mover = Mock()

    def move(email_id):
        if email_id == "case2":
            raise MailboxError("email exception")

    mover.move_to_processed_folder.side_effect = move
    mover.move_to_error_folder.side_effect = move
    app.dependency_overrides[get_mailbox_state_service] = lambda: MailboxStateService(mover)
    return mover


BODY = {"correlationId": "corr-1", "referenceId": "TBD"}


class TestProcessed:

    def test_success(self, client, mover):
        response = client.put("/emails/Y2FzZTE=/processed", json=BODY)

        assert response.status_code == 200
        assert response.json() == {"acknowledge": True, "message": None}
        mover.move_to_processed_folder.assert_called_once_with("case1")
        assert response.headers["X-Request-ID"]

    def test_mailbox_failure(self, client, mover):
        response = client.put("/emails/Y2FzZTI=/processed", json=BODY)

        assert response.status_code == 400
        assert response.json() == {"acknowledge": False, "message": "email exception"}

    def test_invalid_email_id(self, client, mover):
        response = client.put("/emails/not*base64/processed", json=BODY)

        assert response.status_code == 400
        assert response.json()["acknowledge"] is False
        assert "Invalid base64" in response.json()["message"]
        mover.move_to_processed_folder.assert_not_called()

    def test_missing_correlation_id(self, client, mover):
        response = client.put("/emails/Y2FzZTE=/processed", json={"referenceId": "TBD"})

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_request_id_is_echoed(self, client, mover):
        response = client.put(
            "/emails/Y2FzZTE=/processed", json=BODY, headers={"X-Request-ID": "req-42"}
        )

        assert response.headers["X-Request-ID"] == "req-42"


class TestProcessFailed:

    def test_success(self, client, mover):
        response = client.put("/emails/Y2FzZTE=/processFailed", json={"correlationId": "corr-1"})

        assert response.status_code == 200
        assert response.json() == {"acknowledge": True, "message": None}
        mover.move_to_error_folder.assert_called_once_with("case1")

    def test_mailbox_failure(self, client, mover):
        response = client.put("/emails/Y2FzZTI=/processFailed", json={"correlationId": "corr-1"})

        assert response.status_code == 400
        assert response.json() == {"acknowledge": False, "message": "email exception"}
