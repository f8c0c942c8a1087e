"""Remote tree synchronization domain.

Walks remote FTP/SFTP trees into in-memory text files and publishes them
back, independent of the transport behind RemoteFileSystemPort.
"""

from .errors import (
    FileTransferError,
    InputError,
    PublishAbort,
    RemoteConnectionError,
    RemoteOperationError,
    RemoteSyncError,
)
from .models import (
    Credentials,
    DirectoryResult,
    DirectoryStatus,
    EntryKind,
    FetchedFile,
    PublishedFile,
    PublishReport,
    RemoteEntry,
    RemoteProtocol,
    WalkResult,
)
from .publisher import RemoteTreePublisher
from .walker import RemoteTreeWalker

__all__ = [
    # Errors
    "RemoteSyncError",
    "InputError",
    "RemoteConnectionError",
    "RemoteOperationError",
    "FileTransferError",
    "PublishAbort",
    # Models
    "Credentials",
    "DirectoryResult",
    "DirectoryStatus",
    "EntryKind",
    "FetchedFile",
    "PublishedFile",
    "PublishReport",
    "RemoteEntry",
    "RemoteProtocol",
    "WalkResult",
    # Services
    "RemoteTreePublisher",
    "RemoteTreeWalker",
]
