"""Infrastructure adapters: FTP and SFTP implementations of the remote file system port."""

from .registry import create_remote_fs

__all__ = ["create_remote_fs"]
