"""Remote file system registry - maps a protocol to its adapter.

Each call builds a fresh adapter; adapters are never shared between
requests.
"""

import logging
from typing import Callable, Dict

from ..domain.remote.models import Credentials, RemoteProtocol
from ..domain.remote.ports import RemoteFileSystemPort
from .ftp import FTPRemoteFileSystem
from .sftp import SFTPRemoteFileSystem

logger = logging.getLogger(__name__)


def _build_ftp(credentials: Credentials, timeout: float, passive: bool = True) -> RemoteFileSystemPort:
    return FTPRemoteFileSystem(credentials, timeout=timeout, passive=passive)


def _build_sftp(credentials: Credentials, timeout: float, passive: bool = True) -> RemoteFileSystemPort:
    return SFTPRemoteFileSystem(credentials, timeout=timeout)


_ADAPTERS: Dict[RemoteProtocol, Callable[..., RemoteFileSystemPort]] = {
    RemoteProtocol.FTP: _build_ftp,
    RemoteProtocol.SFTP: _build_sftp,
}


def create_remote_fs(
    credentials: Credentials,
    timeout: float,
    passive: bool = True,
) -> RemoteFileSystemPort:
    """Create an unconnected adapter for credentials.protocol.

    Args:
        credentials: Connection parameters (protocol already resolved)
        timeout: Connect timeout in seconds
        passive: FTP passive mode (ignored for SFTP)

    Returns:
        RemoteFileSystemPort: Adapter to be used as a context manager

    Raises:
        ValueError: If the protocol has no registered adapter
    """
    builder = _ADAPTERS.get(credentials.protocol)
    if builder is None:
        raise ValueError(f"Unsupported protocol: {credentials.protocol}")
    logger.debug(f"Creating {credentials.protocol.value} adapter for {credentials.host}")
    return builder(credentials, timeout, passive)
