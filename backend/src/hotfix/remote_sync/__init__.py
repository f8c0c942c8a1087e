"""Transport endpoint for remote tree sync (fetch and publish over FTP/SFTP)."""

from .router import router
from .service import RemoteSyncService, select_protocol

__all__ = ["router", "RemoteSyncService", "select_protocol"]
