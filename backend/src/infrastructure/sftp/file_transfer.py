"""FileTransferPort adapter backed by the SFTP client.

Each call opens its own connection and closes it before returning, so the
adapter holds no state between worker invocations.
"""

import logging
from typing import BinaryIO

from domain.handoff.errors import TransferError
from domain.handoff.ports import FileTransferPort

from .client import SFTPClient, SFTPConfig, SFTPError, remote_dirname

logger = logging.getLogger(__name__)


class SftpFileTransfer(FileTransferPort):
    """Upload, download and move files on the imaging backend SFTP drop."""

    def __init__(self, config: SFTPConfig):
        self.config = config

    def _client(self) -> SFTPClient:
        return SFTPClient(self.config)

    def upload(self, stream: BinaryIO, remote_path: str) -> None:
        try:
            with self._client() as client:
                client.write_stream(stream, remote_path)
        except SFTPError as e:
            raise TransferError(f"Upload to {remote_path} failed: {e}")

    def download(self, remote_path: str) -> bytes:
        try:
            with self._client() as client:
                return client.read_bytes(remote_path)
        except SFTPError as e:
            raise TransferError(f"Download of {remote_path} failed: {e}")

    def move(self, source_path: str, dest_path: str) -> None:
        try:
            with self._client() as client:
                client.mkdir(remote_dirname(dest_path))
                client.move_file(source_path, dest_path)
        except SFTPError as e:
            raise TransferError(f"Move of {source_path} to {dest_path} failed: {e}")
