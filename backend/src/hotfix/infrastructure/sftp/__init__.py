"""SFTP infrastructure module - paramiko adapter for remote tree sync."""

from .client import SFTPRemoteFileSystem

__all__ = ["SFTPRemoteFileSystem"]
