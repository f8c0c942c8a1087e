"""FTP adapter for remote tree synchronization.

Implements RemoteFileSystemPort on top of ftplib:
- Passive mode by default, binary RETR/STOR
- MLSD listing with LIST fallback for servers that lack MLSD
- Idempotent directory chain creation (CWD probe, MKD when missing)
"""

import ftplib
import logging
from io import BytesIO
from typing import List, Optional

from ...domain.remote.errors import (
    FileTransferError,
    RemoteConnectionError,
    RemoteOperationError,
)
from ...domain.remote.models import (
    Credentials,
    DirectoryResult,
    DirectoryStatus,
    RemoteEntry,
    RemoteProtocol,
)
from ...domain.remote.paths import ancestor_prefixes
from ...domain.remote.ports import RemoteFileSystemPort
from .listing import entry_from_facts, parse_list_output

logger = logging.getLogger(__name__)

# Reply codes meaning "command not implemented / not understood"
_UNSUPPORTED_REPLIES = ("500", "501", "502", "504")

# Server refused one command; the connection itself is still usable
_REPLY_ERRORS = (ftplib.error_reply, ftplib.error_temp, ftplib.error_perm)


class FTPRemoteFileSystem(RemoteFileSystemPort):
    """Plain FTP implementation of RemoteFileSystemPort.

    Example:
        credentials = Credentials(host="ftp.example.com", port=21,
                                  username="web", password="secret")
        with FTPRemoteFileSystem(credentials, timeout=15) as fs:
            for entry in fs.list_dir("/public_html"):
                print(entry.full_path, entry.kind)
    """

    def __init__(self, credentials: Credentials, timeout: float = 15.0, passive: bool = True):
        """Initialize FTP adapter.

        Args:
            credentials: Connection parameters
            timeout: Connect (and socket) timeout in seconds
            passive: Use passive data connections
        """
        self.credentials = credentials
        self.timeout = timeout
        self.passive = passive
        self._ftp: Optional[ftplib.FTP] = None
        self._mlsd_supported = True

    @property
    def protocol(self) -> RemoteProtocol:
        return RemoteProtocol.FTP

    def connect(self) -> None:
        """Establish FTP connection and log in.

        Raises:
            RemoteConnectionError: If connection or login fails
        """
        ftp = ftplib.FTP(timeout=self.timeout)
        try:
            logger.info(f"Connecting to FTP server {self.credentials.host}:{self.credentials.port}")
            ftp.connect(self.credentials.host, self.credentials.port)
            ftp.login(self.credentials.username, self.credentials.password)
            ftp.set_pasv(self.passive)
        except ftplib.error_perm as e:
            ftp.close()
            raise RemoteConnectionError(f"Authentication failed: {e}")
        except ftplib.all_errors as e:
            ftp.close()
            raise RemoteConnectionError(f"Failed to connect to FTP server: {e}")

        self._ftp = ftp
        logger.info("FTP connection established")

    def disconnect(self) -> None:
        """Close FTP connection."""
        if self._ftp is None:
            return
        try:
            self._ftp.quit()
        except ftplib.all_errors:
            self._ftp.close()
        self._ftp = None
        logger.info("FTP connection closed")

    def _ensure_connected(self) -> ftplib.FTP:
        """Return the open connection.

        Raises:
            RemoteOperationError: If not connected
        """
        if self._ftp is None:
            raise RemoteOperationError("Not connected to FTP server. Call connect() first.")
        return self._ftp

    def list_dir(self, path: str) -> List[RemoteEntry]:
        ftp = self._ensure_connected()

        if self._mlsd_supported:
            try:
                return [
                    entry
                    for entry in (
                        entry_from_facts(path, name, facts)
                        for name, facts in ftp.mlsd(path, facts=["type"])
                    )
                    if entry is not None
                ]
            except ftplib.error_perm as e:
                if not str(e).startswith(_UNSUPPORTED_REPLIES):
                    raise RemoteOperationError(f"Failed to list directory {path}: {e}")
                logger.info("Server does not support MLSD, falling back to LIST")
                self._mlsd_supported = False
            except ftplib.all_errors as e:
                raise RemoteOperationError(f"Failed to list directory {path}: {e}")

        lines: List[str] = []
        try:
            ftp.retrlines(f"LIST {path}", lines.append)
        except ftplib.all_errors as e:
            raise RemoteOperationError(f"Failed to list directory {path}: {e}")
        return parse_list_output(path, lines)

    def download(self, path: str) -> bytes:
        ftp = self._ensure_connected()
        buffer = BytesIO()
        try:
            ftp.retrbinary(f"RETR {path}", buffer.write)
        except ftplib.all_errors as e:
            raise FileTransferError(path, str(e))
        return buffer.getvalue()

    def upload(self, data: bytes, path: str) -> None:
        ftp = self._ensure_connected()
        try:
            ftp.storbinary(f"STOR {path}", BytesIO(data))
        except ftplib.all_errors as e:
            raise FileTransferError(path, str(e))
        logger.debug(f"Stored {len(data)} bytes at {path}")

    def ensure_directory_chain(self, path: str) -> List[DirectoryResult]:
        """Create every missing ancestor of path.

        Each prefix is probed with CWD; a prefix that cannot be entered is
        created with MKD. An error reply to either command marks only that
        segment FAILED. A lost connection raises RemoteOperationError. The
        working directory is restored afterwards.
        """
        ftp = self._ensure_connected()
        prefixes = ancestor_prefixes(path)
        if not prefixes:
            return []

        try:
            original_cwd = ftp.pwd()
        except ftplib.all_errors:
            original_cwd = None

        results = []
        try:
            for prefix in prefixes:
                try:
                    ftp.cwd(prefix)
                    results.append(DirectoryResult(path=prefix, status=DirectoryStatus.EXISTED))
                    continue
                except _REPLY_ERRORS:
                    pass

                try:
                    ftp.mkd(prefix)
                    results.append(DirectoryResult(path=prefix, status=DirectoryStatus.CREATED))
                    logger.debug(f"Created directory: {prefix}")
                except _REPLY_ERRORS as e:
                    results.append(DirectoryResult(path=prefix, status=DirectoryStatus.FAILED, error=str(e)))
                    logger.warning(f"Could not create directory {prefix}: {e}")
        except ftplib.all_errors as e:
            raise RemoteOperationError(f"Failed to ensure directory {path}: {e}")
        finally:
            if original_cwd:
                try:
                    ftp.cwd(original_cwd)
                except ftplib.all_errors as e:
                    logger.debug(f"Could not restore working directory {original_cwd}: {e}")

        return results
