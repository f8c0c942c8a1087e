"""Remote file system port interfaces."""

from .remote_fs_port import RemoteFileSystemPort

__all__ = ["RemoteFileSystemPort"]
