"""Unit tests for the SFTP client and the FileTransferPort adapter.

paramiko is mocked; no SFTP server is needed.
"""

import io

import pytest
from unittest.mock import MagicMock, Mock, patch

from domain.handoff.errors import TransferError
from infrastructure.sftp import SFTPClient, SFTPConfig, SFTPError, SftpFileTransfer


@pytest.fixture
def config():
    return SFTPConfig(host="sftp.test", username="dps", password="secret", remote_location="/dps")


@pytest.fixture
def sftp():
    """Mock paramiko SFTP channel."""
    return Mock()


@pytest.fixture
def client(config, sftp):
    """Connected SFTPClient over the mocked channel."""
    client = SFTPClient(config)
    client._sftp_client = sftp
    return client


class TestSFTPClient:

    def test_connect_with_password(self, config):
        with patch("infrastructure.sftp.client.paramiko.SSHClient") as ssh_cls:
            ssh = ssh_cls.return_value
            client = SFTPClient(config)
            client.connect()

        kwargs = ssh.connect.call_args.kwargs
        assert kwargs["hostname"] == "sftp.test"
        assert kwargs["password"] == "secret"
        assert kwargs["timeout"] == config.timeout_seconds
        ssh.open_sftp.assert_called_once()

    def test_connect_without_credentials(self):
        client = SFTPClient(SFTPConfig(host="sftp.test", username="dps"))

        with patch("infrastructure.sftp.client.paramiko.SSHClient"):
            with pytest.raises(SFTPError, match="password or ssh_key"):
                client.connect()

    def test_connect_network_failure(self, config):
        with patch("infrastructure.sftp.client.paramiko.SSHClient") as ssh_cls:
            ssh_cls.return_value.connect.side_effect = OSError("unreachable")

            with pytest.raises(SFTPError, match="unreachable"):
                SFTPClient(config).connect()

    def test_not_connected(self, config):
        with pytest.raises(SFTPError, match="Not connected"):
            SFTPClient(config).read_bytes("/dps/F1.xml")

    def test_atomic_write(self, client, sftp):
        stream = io.BytesIO(b"data")

        path = client.write_stream(stream, "/dps/a.pdf")

        assert path == "/dps/a.pdf"
        sftp.putfo.assert_called_once_with(stream, "/dps/a.pdf.tmp")
        sftp.posix_rename.assert_called_once_with("/dps/a.pdf.tmp", "/dps/a.pdf")

    def test_atomic_write_falls_back_to_remove_and_rename(self, client, sftp):
        sftp.posix_rename.side_effect = IOError("unsupported")

        client.write_stream(io.BytesIO(b"data"), "/dps/a.pdf")

        sftp.remove.assert_called_once_with("/dps/a.pdf")
        sftp.rename.assert_called_once_with("/dps/a.pdf.tmp", "/dps/a.pdf")

    def test_failed_write_removes_tmp(self, client, sftp):
        sftp.putfo.side_effect = IOError("disk full")

        with pytest.raises(SFTPError, match="disk full"):
            client.write_stream(io.BytesIO(b"data"), "/dps/a.pdf")

        sftp.remove.assert_called_once_with("/dps/a.pdf.tmp")

    def test_direct_write(self, config, sftp):
        config.atomic_write = False
        client = SFTPClient(config)
        client._sftp_client = sftp

        client.write_stream(io.BytesIO(b"data"), "/dps/a.pdf")

        assert sftp.putfo.call_args.args[1] == "/dps/a.pdf"
        sftp.posix_rename.assert_not_called()

    def test_read_bytes(self, client, sftp):
        sftp.getfo.side_effect = lambda path, buffer: buffer.write(b"<data/>")

        assert client.read_bytes("/dps/F1.xml") == b"<data/>"

    def test_read_missing_file(self, client, sftp):
        sftp.getfo.side_effect = IOError("No such file")

        with pytest.raises(SFTPError, match="No such file"):
            client.read_bytes("/dps/F1.xml")

    def test_mkdir_existing_directory(self, client, sftp):
        client.mkdir("/dps/archive")

        sftp.stat.assert_called_once_with("/dps/archive")
        sftp.mkdir.assert_not_called()

    def test_mkdir_creates_missing_directory(self, client, sftp):
        sftp.stat.side_effect = IOError("missing")

        client.mkdir("/dps/archive")

        sftp.mkdir.assert_called_once_with("/dps/archive")


class TestSftpFileTransfer:
    """Test suite for the FileTransferPort adapter."""

    @pytest.fixture
    def sftp_client(self):
        client = MagicMock()
        client.__enter__.return_value = client
        return client

    @pytest.fixture
    def transfer(self, config, sftp_client):
        transfer = SftpFileTransfer(config)
        transfer._client = Mock(return_value=sftp_client)
        return transfer

    def test_upload(self, transfer, sftp_client):
        stream = io.BytesIO(b"data")

        transfer.upload(stream, "/dps/a.pdf")

        sftp_client.write_stream.assert_called_once_with(stream, "/dps/a.pdf")
        sftp_client.__exit__.assert_called_once()

    def test_download(self, transfer, sftp_client):
        sftp_client.read_bytes.return_value = b"<data/>"

        assert transfer.download("/dps/F1.xml") == b"<data/>"

    def test_move_creates_destination_folder(self, transfer, sftp_client):
        transfer.move("/dps/F1.xml", "/dps/archive/F1.xml")

        sftp_client.mkdir.assert_called_once_with("/dps/archive")
        sftp_client.move_file.assert_called_once_with("/dps/F1.xml", "/dps/archive/F1.xml")

    @pytest.mark.parametrize(
        "operation, args, method",
        [
            ("upload", (io.BytesIO(b"x"), "/dps/a.pdf"), "write_stream"),
            ("download", ("/dps/F1.xml",), "read_bytes"),
            ("move", ("/dps/F1.xml", "/dps/error/F1.xml"), "move_file"),
        ],
    )
    def test_sftp_errors_become_transfer_errors(self, transfer, sftp_client, operation, args, method):
        getattr(sftp_client, method).side_effect = SFTPError("connection reset")

        with pytest.raises(TransferError, match="connection reset"):
            getattr(transfer, operation)(*args)

    def test_connect_failure_becomes_transfer_error(self, transfer, sftp_client):
        sftp_client.__enter__.side_effect = SFTPError("Authentication failed")

        with pytest.raises(TransferError, match="Authentication failed"):
            transfer.upload(io.BytesIO(b"x"), "/dps/a.pdf")
