"""SFTP Client for the imaging backend drop with atomic writes.

Wraps a paramiko SSH session and offers the few file operations the
handoff workers need:
- Atomic overwrite operations (.tmp + rename)
- Binary streaming upload and download
- Remote moves with on-demand folder creation
- Password or RSA key login
"""

import logging
import posixpath
from dataclasses import dataclass
from io import BytesIO, StringIO
from typing import BinaryIO, Optional

import paramiko

logger = logging.getLogger(__name__)


class SFTPError(Exception):
    """Any failure talking to the SFTP drop."""
    pass


@dataclass
class SFTPConfig:
    """Connection settings for the imaging backend drop.

    Attributes:
        host: Drop hostname (also reported to the release service)
        username: Login name
        port: SSH port
        password: Login password, used when no ssh_key is set
        ssh_key: PEM encoded RSA private key
        remote_location: Base directory shared with the imaging backend
        timeout_seconds: Connect and channel timeout
        atomic_write: Upload to a .tmp name and rename over the target
    """
    host: str
    username: str
    port: int = 22
    password: Optional[str] = None
    ssh_key: Optional[str] = None
    remote_location: str = "/dps"
    timeout_seconds: float = 30.0
    atomic_write: bool = True


class SFTPClient:
    """One SSH session to the drop; use as a context manager.

    Example:
        config = SFTPConfig(host="sftp.example.com", username="dps", password="secret")

        with SFTPClient(config) as client:
            client.write_stream(stream, "/dps/attachment.pdf")
    """

    def __init__(self, config: SFTPConfig):
        self.config = config
        self._ssh_client: Optional[paramiko.SSHClient] = None
        self._sftp_client: Optional[paramiko.SFTPClient] = None

    def connect(self) -> None:
        """Open the SSH session and its SFTP channel.

        Raises:
            SFTPError: On missing credentials or any connect failure
        """
        try:
            self._ssh_client = paramiko.SSHClient()
            self._ssh_client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

            connect_kwargs = {
                "hostname": self.config.host,
                "port": self.config.port,
                "username": self.config.username,
                "look_for_keys": False,
                "allow_agent": False,
                "timeout": self.config.timeout_seconds,
                "banner_timeout": self.config.timeout_seconds,
                "auth_timeout": self.config.timeout_seconds,
            }

            if self.config.ssh_key:
                connect_kwargs["pkey"] = paramiko.RSAKey.from_private_key(StringIO(self.config.ssh_key))
            elif self.config.password:
                connect_kwargs["password"] = self.config.password
            else:
                raise SFTPError("Either password or ssh_key must be provided")

            logger.info(f"Opening SFTP session to {self.config.host}:{self.config.port}")
            self._ssh_client.connect(**connect_kwargs)
            self._sftp_client = self._ssh_client.open_sftp()
            self._sftp_client.get_channel().settimeout(self.config.timeout_seconds)
            logger.debug("SFTP session open")

        except SFTPError:
            self.close()
            raise
        except paramiko.AuthenticationException as e:
            self.close()
            raise SFTPError(f"Authentication failed for {self.config.username}: {e}")
        except paramiko.SSHException as e:
            self.close()
            raise SFTPError(f"SSH negotiation with {self.config.host} failed: {e}")
        except OSError as e:
            self.close()
            raise SFTPError(f"Cannot reach {self.config.host}: {e}")

    def close(self) -> None:
        """Close the channel and the session; safe to call twice."""
        if self._sftp_client:
            self._sftp_client.close()
            self._sftp_client = None
        if self._ssh_client:
            self._ssh_client.close()
            self._ssh_client = None
        logger.debug("SFTP connection closed")

    def _ensure_connected(self) -> paramiko.SFTPClient:
        if not self._sftp_client:
            raise SFTPError("Not connected, use the client as a context manager")
        return self._sftp_client

    def write_stream(self, stream: BinaryIO, remote_path: str) -> str:
        """Write a binary stream to remote_path, replacing any existing file.

        With atomic_write the content lands in ``{remote_path}.tmp`` first and
        is renamed over the final name, so the imaging backend never picks up
        a partial file and a repeated upload simply overwrites.

        Returns:
            str: remote_path

        Raises:
            SFTPError: If the upload or the rename fails
        """
        sftp = self._ensure_connected()

        if not self.config.atomic_write:
            try:
                sftp.putfo(stream, remote_path)
            except (IOError, paramiko.SSHException) as e:
                raise SFTPError(f"Failed to write file {remote_path}: {e}")
            logger.info(f"Successfully wrote file to SFTP: {remote_path}")
            return remote_path

        tmp_path = f"{remote_path}.tmp"
        try:
            logger.debug(f"Uploading to {tmp_path}")
            sftp.putfo(stream, tmp_path)
            logger.debug(f"Renaming {tmp_path} -> {remote_path}")
            self._replace(tmp_path, remote_path)
        except (IOError, paramiko.SSHException) as e:
            try:
                sftp.remove(tmp_path)
            except IOError:
                logger.debug(f"Temporary file {tmp_path} already gone")
            raise SFTPError(f"Failed to write file {remote_path}: {e}")

        logger.info(f"Successfully wrote file to SFTP: {remote_path}")
        return remote_path

    def read_bytes(self, remote_path: str) -> bytes:
        """Download remote_path into memory.

        Raises:
            SFTPError: If the file is missing or the transfer fails
        """
        sftp = self._ensure_connected()

        buffer = BytesIO()
        try:
            sftp.getfo(remote_path, buffer)
        except (IOError, paramiko.SSHException) as e:
            raise SFTPError(f"Failed to read file {remote_path}: {e}")
        return buffer.getvalue()

    def move_file(self, source_path: str, dest_path: str) -> None:
        """Rename source_path to dest_path, overwriting dest_path.

        Raises:
            SFTPError: If the rename fails
        """
        self._ensure_connected()

        try:
            self._replace(source_path, dest_path)
            logger.debug(f"{source_path} -> {dest_path}")
        except (IOError, paramiko.SSHException) as e:
            raise SFTPError(f"Cannot move {source_path} to {dest_path}: {e}")

    def mkdir(self, directory: str) -> None:
        """Create a single directory level unless it already exists.

        Raises:
            SFTPError: If the directory cannot be created
        """
        sftp = self._ensure_connected()

        try:
            sftp.stat(directory)
            return
        except IOError:
            pass

        try:
            sftp.mkdir(directory)
            logger.debug(f"mkdir {directory}")
        except IOError as e:
            raise SFTPError(f"Cannot create {directory}: {e}")

    def _replace(self, source_path: str, dest_path: str) -> None:
        sftp = self._ensure_connected()
        try:
            sftp.posix_rename(source_path, dest_path)
        except IOError:
            # Server without the posix-rename extension: plain rename refuses
            # to overwrite, so drop the destination first
            sftp.stat(source_path)
            try:
                sftp.remove(dest_path)
            except IOError:
                pass
            sftp.rename(source_path, dest_path)

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def remote_dirname(remote_path: str) -> str:
    return posixpath.dirname(remote_path)
