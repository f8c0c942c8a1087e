"""SFTP adapter for remote tree synchronization.

Implements RemoteFileSystemPort on top of paramiko:
- Password authentication (no agent, no key lookup)
- One SSH transport and one SFTP channel per adapter
- Directory chain creation by walking path segments with stat/mkdir
"""

import logging
import stat
from io import BytesIO
from typing import List, Optional

import paramiko

from ...domain.remote.errors import (
    FileTransferError,
    RemoteConnectionError,
    RemoteOperationError,
)
from ...domain.remote.models import (
    Credentials,
    DirectoryResult,
    DirectoryStatus,
    EntryKind,
    RemoteEntry,
    RemoteProtocol,
)
from ...domain.remote.paths import ancestor_prefixes, join_remote
from ...domain.remote.ports import RemoteFileSystemPort

logger = logging.getLogger(__name__)


def _entry_kind(mode: Optional[int]) -> EntryKind:
    if mode is None:
        return EntryKind.OTHER
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


class SFTPRemoteFileSystem(RemoteFileSystemPort):
    """SFTP implementation of RemoteFileSystemPort.

    Example:
        credentials = Credentials(host="sftp.example.com", port=22,
                                  username="web", password="secret",
                                  protocol=RemoteProtocol.SFTP)
        with SFTPRemoteFileSystem(credentials, timeout=20) as fs:
            fs.ensure_directory_chain("/var/www/css")
            fs.upload(b"body{}", "/var/www/css/site.css")
    """

    def __init__(self, credentials: Credentials, timeout: float = 15.0):
        """Initialize SFTP adapter.

        Args:
            credentials: Connection parameters
            timeout: Connect, banner and auth timeout in seconds
        """
        self.credentials = credentials
        self.timeout = timeout
        self._ssh_client: Optional[paramiko.SSHClient] = None
        self._sftp_client: Optional[paramiko.SFTPClient] = None

    @property
    def protocol(self) -> RemoteProtocol:
        return RemoteProtocol.SFTP

    def connect(self) -> None:
        """Establish SFTP connection.

        Raises:
            RemoteConnectionError: If connection fails
        """
        self._ssh_client = paramiko.SSHClient()
        self._ssh_client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            logger.info(f"Connecting to SFTP server {self.credentials.host}:{self.credentials.port}")
            self._ssh_client.connect(
                hostname=self.credentials.host,
                port=self.credentials.port,
                username=self.credentials.username,
                password=self.credentials.password,
                look_for_keys=False,
                allow_agent=False,
                timeout=self.timeout,
                banner_timeout=self.timeout,
                auth_timeout=self.timeout,
            )
            self._sftp_client = self._ssh_client.open_sftp()
        except paramiko.AuthenticationException as e:
            self.disconnect()
            raise RemoteConnectionError(f"Authentication failed: {e}")
        except paramiko.SSHException as e:
            self.disconnect()
            raise RemoteConnectionError(f"SSH connection failed: {e}")
        except OSError as e:
            self.disconnect()
            raise RemoteConnectionError(f"Failed to connect to SFTP server: {e}")

        logger.info("SFTP connection established")

    def disconnect(self) -> None:
        """Close SFTP connection."""
        if self._sftp_client is None and self._ssh_client is None:
            return
        if self._sftp_client:
            try:
                self._sftp_client.close()
            except (paramiko.SSHException, OSError) as e:
                logger.debug(f"Error closing SFTP channel: {e}")
            self._sftp_client = None
        if self._ssh_client:
            self._ssh_client.close()
            self._ssh_client = None
        logger.info("SFTP connection closed")

    def _ensure_connected(self) -> paramiko.SFTPClient:
        """Return the open SFTP channel.

        Raises:
            RemoteOperationError: If not connected
        """
        if not self._sftp_client:
            raise RemoteOperationError("Not connected to SFTP server. Call connect() first.")
        return self._sftp_client

    def list_dir(self, path: str) -> List[RemoteEntry]:
        sftp = self._ensure_connected()
        try:
            attrs = sftp.listdir_attr(path)
        except (paramiko.SSHException, OSError) as e:
            raise RemoteOperationError(f"Failed to list directory {path}: {e}")

        return [
            RemoteEntry(
                name=attr.filename,
                full_path=join_remote(path, attr.filename),
                kind=_entry_kind(attr.st_mode),
            )
            for attr in attrs
            if attr.filename not in (".", "..")
        ]

    def download(self, path: str) -> bytes:
        sftp = self._ensure_connected()
        buffer = BytesIO()
        try:
            sftp.getfo(path, buffer)
        except (paramiko.SSHException, OSError) as e:
            raise FileTransferError(path, str(e))
        return buffer.getvalue()

    def upload(self, data: bytes, path: str) -> None:
        sftp = self._ensure_connected()
        try:
            sftp.putfo(BytesIO(data), path)
        except (paramiko.SSHException, OSError) as e:
            raise FileTransferError(path, str(e))
        logger.debug(f"Stored {len(data)} bytes at {path}")

    def ensure_directory_chain(self, path: str) -> List[DirectoryResult]:
        """Create every missing ancestor of path, root first.

        A failed stat counts as "missing" and mkdir is attempted; a failed
        mkdir is reported as FAILED and the next segment is still tried.
        """
        sftp = self._ensure_connected()
        results = []

        for prefix in ancestor_prefixes(path):
            try:
                attr = sftp.stat(prefix)
                if attr.st_mode is not None and stat.S_ISDIR(attr.st_mode):
                    results.append(DirectoryResult(path=prefix, status=DirectoryStatus.EXISTED))
                    continue
            except (paramiko.SSHException, OSError):
                pass

            try:
                sftp.mkdir(prefix)
                results.append(DirectoryResult(path=prefix, status=DirectoryStatus.CREATED))
                logger.debug(f"Created directory: {prefix}")
            except (paramiko.SSHException, OSError) as e:
                results.append(DirectoryResult(path=prefix, status=DirectoryStatus.FAILED, error=str(e)))
                logger.warning(f"Could not create directory {prefix}: {e}")

        return results
