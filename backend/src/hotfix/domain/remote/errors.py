"""Error taxonomy for remote tree synchronization.

The HTTP layer maps these to status codes:
- InputError -> 400
- RemoteConnectionError, RemoteOperationError, PublishAbort -> 500

FileTransferError is raised by adapters for a single file. The walker
swallows it (the file is left out of the result); the publisher records it
per file or converts it into PublishAbort in fail-fast mode.
"""


class RemoteSyncError(Exception):
    """Base exception for remote sync operations."""
    pass


class InputError(RemoteSyncError):
    """Missing or invalid request fields."""
    pass


class RemoteConnectionError(RemoteSyncError):
    """Connect or login failed (auth failure, unreachable host, timeout)."""
    pass


class RemoteOperationError(RemoteSyncError):
    """A remote operation failed on an open connection (e.g. listing)."""
    pass


class FileTransferError(RemoteOperationError):
    """Download or upload of a single file failed."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.reason = message


class PublishAbort(RemoteSyncError):
    """A publish batch was halted by a failed upload."""

    def __init__(self, message: str, written: int = 0):
        super().__init__(message)
        self.written = written
