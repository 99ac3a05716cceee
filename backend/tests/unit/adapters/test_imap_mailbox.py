"""Unit tests for the IMAP mailbox mover (imaplib mocked)"""

import imaplib

import pytest
from unittest.mock import Mock, call, patch

from domain.handoff.errors import MailboxError
from infrastructure.mailbox import ImapConfig, ImapMailboxMover


@pytest.fixture
def connection():
    connection = Mock()
    connection.capabilities = ("IMAP4REV1", "MOVE")
    connection.select.return_value = ("OK", [b"3"])
    connection.uid.return_value = ("OK", [b"1 (UID 42 FLAGS ())"])
    return connection


@pytest.fixture
def mover(connection):
    config = ImapConfig(host="imap.test", username="dps", password="pw")
    with patch("infrastructure.mailbox.imap_mailbox.imaplib.IMAP4_SSL", return_value=connection):
        yield ImapMailboxMover(config)


class TestImapMailboxMover:

    def test_move_to_processed_uses_move(self, mover, connection):
        mover.move_to_processed_folder("42")

        connection.login.assert_called_once_with("dps", "pw")
        connection.select.assert_called_once_with("INBOX")
        assert connection.uid.call_args_list[-1] == call("MOVE", "42", "Processed")
        connection.logout.assert_called_once()

    def test_move_to_error_without_move_extension(self, mover, connection):
        connection.capabilities = ("IMAP4REV1",)

        mover.move_to_error_folder("42")

        assert call("COPY", "42", "Error") in connection.uid.call_args_list
        assert call("STORE", "42", "+FLAGS", "(\\Deleted)") in connection.uid.call_args_list
        connection.expunge.assert_called_once()

    def test_uidplus_expunges_only_the_moved_message(self, mover, connection):
        connection.capabilities = ("IMAP4REV1", "UIDPLUS")

        mover.move_to_error_folder("42")

        assert connection.uid.call_args_list[-1] == call("EXPUNGE", "42")
        connection.expunge.assert_not_called()

    def test_refused_delete_flag(self, mover, connection):
        connection.capabilities = ("IMAP4REV1",)
        connection.uid.side_effect = [
            ("OK", [b"1 (FLAGS ())"]),
            ("OK", [b"copied"]),
            ("NO", [b"read-only folder"]),
        ]

        with pytest.raises(MailboxError, match="deleted"):
            mover.move_to_error_folder("42")

        connection.expunge.assert_not_called()

    def test_message_not_found(self, mover, connection):
        connection.uid.return_value = ("OK", [None])

        with pytest.raises(MailboxError, match="not found"):
            mover.move_to_processed_folder("42")

        connection.logout.assert_called_once()

    def test_invalid_id(self, mover):
        with pytest.raises(MailboxError, match="Invalid"):
            mover.move_to_processed_folder("case2")

    def test_login_failure(self, mover, connection):
        connection.login.side_effect = imaplib.IMAP4.error("LOGIN failed")

        with pytest.raises(MailboxError, match="LOGIN failed"):
            mover.move_to_processed_folder("42")

    def test_move_refused(self, mover, connection):
        connection.uid.side_effect = [("OK", [b"1 (FLAGS ())"]), ("NO", [b"no such folder"])]

        with pytest.raises(MailboxError, match="Failed to move"):
            mover.move_to_processed_folder("42")
