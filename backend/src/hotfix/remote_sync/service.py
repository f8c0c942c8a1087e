"""Remote sync service - the request-level contract for fetch and publish.

Resolves credentials and protocol, opens exactly one adapter per call, and
runs the walker or publisher inside a with-block so the connection is
released on every exit path. Nothing is cached between calls.
"""

import logging
import time
from typing import Callable, List, Optional, Sequence

from ..config import Settings
from ..domain.remote import (
    Credentials,
    FetchedFile,
    InputError,
    PublishAbort,
    PublishReport,
    RemoteProtocol,
    RemoteTreePublisher,
    RemoteTreeWalker,
    WalkResult,
)
from ..domain.remote.paths import normalize_relative_name
from ..domain.remote.ports import RemoteFileSystemPort
from ..infrastructure import create_remote_fs
from ..observability import (
    remote_files_total,
    remote_operation_duration_seconds,
    remote_operations_total,
)

logger = logging.getLogger(__name__)

RemoteFSFactory = Callable[..., RemoteFileSystemPort]


def select_protocol(protocol: Optional[str], port: Optional[int], sftp_ports: Sequence[int]) -> RemoteProtocol:
    """Pick the transport for a request.

    An explicit protocol wins; otherwise a port in sftp_ports means SFTP and
    anything else FTP.

    Raises:
        InputError: If protocol is given but is neither 'ftp' nor 'sftp'
    """
    if protocol:
        try:
            return RemoteProtocol(protocol.strip().lower())
        except ValueError:
            raise InputError(f"unsupported protocol: {protocol}")
    if port and port in sftp_ports:
        return RemoteProtocol.SFTP
    return RemoteProtocol.FTP


class RemoteSyncService:
    """Fetch and publish remote trees.

    Example:
        service = RemoteSyncService(get_settings())
        credentials = service.build_credentials(host="h", port=21, username="u",
                                                password="p", path="/public_html")
        result = service.fetch(credentials)
    """

    def __init__(self, settings: Settings, remote_fs_factory: RemoteFSFactory = create_remote_fs):
        self.settings = settings
        self._remote_fs_factory = remote_fs_factory

    def build_credentials(
        self,
        host: Optional[str],
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        path: Optional[str] = None,
        protocol: Optional[str] = None,
    ) -> Credentials:
        """Validate request fields and resolve protocol and port.

        Raises:
            InputError: If host is missing or protocol is unknown
        """
        host = (host or "").strip()
        if not host:
            raise InputError("host is required")

        selected = select_protocol(protocol, port, self.settings.SFTP_PORTS)
        if not port:
            is_sftp = selected is RemoteProtocol.SFTP
            port = self.settings.SFTP_DEFAULT_PORT if is_sftp else self.settings.FTP_DEFAULT_PORT

        return Credentials(
            host=host,
            port=port,
            username=username or "",
            password=password or "",
            base_path=path or "/",
            protocol=selected,
        )

    def prepare_files(self, files: Sequence[FetchedFile]) -> List[FetchedFile]:
        """Normalize names of files to publish.

        Raises:
            InputError: If the list is empty, a name escapes the base or
                content cannot be written as UTF-8 (e.g. a lone surrogate)
        """
        if not files:
            raise InputError("files required")

        prepared = []
        for f in files:
            name = normalize_relative_name(f.name)
            try:
                f.content.encode("utf-8")
            except UnicodeEncodeError:
                raise InputError(f"file content is not valid UTF-8 text: {name}")
            prepared.append(FetchedFile(name=name, content=f.content))
        return prepared

    def _open(self, credentials: Credentials, timeout: float) -> RemoteFileSystemPort:
        return self._remote_fs_factory(credentials, timeout, self.settings.REMOTE_FTP_PASSIVE)

    def fetch(self, credentials: Credentials) -> WalkResult:
        """Walk credentials.base_path and return the matching text files.

        Raises:
            RemoteConnectionError: If the connection cannot be opened
            RemoteOperationError: If a directory cannot be listed
        """
        protocol = credentials.protocol.value
        logger.info(f"Fetch requested: {credentials.describe()}", extra={"operation": "fetch"})

        started = time.monotonic()
        try:
            with self._open(credentials, self.settings.REMOTE_FETCH_TIMEOUT_SECONDS) as remote_fs:
                walker = RemoteTreeWalker(remote_fs, extensions=self.settings.FETCH_EXTENSIONS)
                result = walker.walk(credentials.base_path)
        except Exception:
            remote_operations_total.labels(operation="fetch", protocol=protocol, status="error").inc()
            raise
        finally:
            remote_operation_duration_seconds.labels(operation="fetch", protocol=protocol).observe(
                time.monotonic() - started
            )

        remote_operations_total.labels(operation="fetch", protocol=protocol, status="success").inc()
        remote_files_total.labels(operation="fetch", outcome="fetched").inc(len(result.files))
        remote_files_total.labels(operation="fetch", outcome="failed").inc(len(result.failed_paths))
        remote_files_total.labels(operation="fetch", outcome="filtered").inc(result.filtered_out)
        remote_files_total.labels(operation="fetch", outcome="symlink").inc(result.skipped_symlinks)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            f"Fetch completed: {len(result.files)} files from {result.directories_visited} directories",
            extra={"operation": "fetch", "file_count": len(result.files), "elapsed_ms": elapsed_ms},
        )
        if result.files:
            logger.info(f"First files: {[f.name for f in result.files[:5]]}")
        if result.failed_paths:
            logger.warning(f"Skipped {len(result.failed_paths)} unreadable files")
        return result

    def publish(self, credentials: Credentials, files: Sequence[FetchedFile]) -> PublishReport:
        """Write files under credentials.base_path.

        Files are validated before any connection is opened.

        Raises:
            InputError: If files is empty or contains an invalid name
            RemoteConnectionError: If the connection cannot be opened
            PublishAbort: If PUBLISH_FAIL_FAST is set and an upload fails
        """
        prepared = self.prepare_files(files)
        protocol = credentials.protocol.value
        logger.info(
            f"Publish requested: {len(prepared)} files, {credentials.describe()}",
            extra={"operation": "publish", "file_count": len(prepared)},
        )

        started = time.monotonic()
        try:
            with self._open(credentials, self.settings.REMOTE_PUBLISH_TIMEOUT_SECONDS) as remote_fs:
                publisher = RemoteTreePublisher(remote_fs, fail_fast=self.settings.PUBLISH_FAIL_FAST)
                report = publisher.publish(credentials.base_path, prepared)
        except PublishAbort as e:
            remote_operations_total.labels(operation="publish", protocol=protocol, status="error").inc()
            remote_files_total.labels(operation="publish", outcome="written").inc(e.written)
            remote_files_total.labels(operation="publish", outcome="upload_failed").inc()
            raise
        except Exception:
            remote_operations_total.labels(operation="publish", protocol=protocol, status="error").inc()
            raise
        finally:
            remote_operation_duration_seconds.labels(operation="publish", protocol=protocol).observe(
                time.monotonic() - started
            )

        status = "success" if report.ok else "error"
        remote_operations_total.labels(operation="publish", protocol=protocol, status=status).inc()
        remote_files_total.labels(operation="publish", outcome="written").inc(len(report.written))
        remote_files_total.labels(operation="publish", outcome="upload_failed").inc(len(report.failed))

        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            f"Publish completed: {len(report.written)} written, {len(report.failed)} failed",
            extra={"operation": "publish", "file_count": len(report.written), "elapsed_ms": elapsed_ms},
        )
        return report
