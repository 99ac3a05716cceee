"""SFTP infrastructure module - SFTP client and file transfer adapter for the imaging drop."""

from .client import SFTPClient, SFTPConfig, SFTPError
from .file_transfer import SftpFileTransfer

__all__ = ["SFTPClient", "SFTPConfig", "SFTPError", "SftpFileTransfer"]
