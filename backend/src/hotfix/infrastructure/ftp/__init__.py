"""FTP infrastructure module - ftplib adapter for remote tree sync."""

from .client import FTPRemoteFileSystem

__all__ = ["FTPRemoteFileSystem"]
