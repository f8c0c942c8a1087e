"""Remote File System Port - uniform operation surface over FTP and SFTP.

This port hides the protocol differences from the walker and publisher.
Adapters must implement this interface for each transport.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import DirectoryResult, RemoteEntry, RemoteProtocol


class RemoteFileSystemPort(ABC):
    """Port interface for remote file system access.

    An adapter owns exactly one connection. It is opened by connect() and
    released by disconnect(); the context-manager protocol ties both to a
    block so the connection is released on every exit path:

        with adapter:
            entries = adapter.list_dir("/public_html")

    Adapters never retry. Retrying is a caller concern.
    """

    @property
    @abstractmethod
    def protocol(self) -> RemoteProtocol:
        """Transport implemented by this adapter."""
        pass

    @abstractmethod
    def connect(self) -> None:
        """Open the connection.

        Raises:
            RemoteConnectionError: If the host is unreachable, login fails or
                the connect timeout expires
        """
        pass

    @abstractmethod
    def list_dir(self, path: str) -> List[RemoteEntry]:
        """List one directory in server order, without "." and "..".

        Raises:
            RemoteOperationError: If the directory cannot be listed
        """
        pass

    @abstractmethod
    def download(self, path: str) -> bytes:
        """Read a whole remote file.

        Raises:
            FileTransferError: If the file cannot be read
        """
        pass

    @abstractmethod
    def upload(self, data: bytes, path: str) -> None:
        """Write data to path, replacing any existing file.

        Raises:
            FileTransferError: If the file cannot be written
        """
        pass

    @abstractmethod
    def ensure_directory_chain(self, path: str) -> List[DirectoryResult]:
        """Make every ancestor prefix of path exist.

        Never raises for a single segment; a segment that could not be
        created is reported with DirectoryStatus.FAILED. "/" is a no-op.
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the connection. Idempotent, never raises."""
        pass

    def __enter__(self):
        """Context manager entry - auto-connect."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - auto-close."""
        self.disconnect()
        return False
