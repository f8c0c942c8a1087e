"""Remote Tree Publisher - writes in-memory files back to a remote tree.

Each file goes to base + "/" + name. Its parent directory chain is ensured
first through the adapter, which hides how the transport creates
directories. Content is always written as UTF-8.
"""

import logging
from typing import Sequence

from .errors import FileTransferError, PublishAbort
from .models import FetchedFile, PublishedFile, PublishReport
from .paths import build_remote_target, remote_parent
from .ports import RemoteFileSystemPort

logger = logging.getLogger(__name__)


class RemoteTreePublisher:
    """Publish a batch of files under a remote base directory.

    With fail_fast=False (default) a failed upload is recorded for that file
    and the batch continues. With fail_fast=True the first failed upload
    raises PublishAbort and the remaining files are not attempted.

    Example:
        with create_remote_fs(credentials, timeout=20) as fs:
            report = RemoteTreePublisher(fs).publish("/root", files)
        if not report.ok:
            ...
    """

    def __init__(self, remote_fs: RemoteFileSystemPort, fail_fast: bool = False):
        self._fs = remote_fs
        self._fail_fast = fail_fast

    def publish(self, base: str, files: Sequence[FetchedFile]) -> PublishReport:
        """Write files under base.

        Args:
            base: Remote base directory
            files: Files with relative names

        Returns:
            PublishReport with one PublishedFile per input file (in fail-fast
            mode, only files up to the first failure) and the merged
            directory outcomes

        Raises:
            PublishAbort: In fail-fast mode, when an upload fails
        """
        report = PublishReport()

        for item in files:
            remote_path = build_remote_target(base, item.name)
            directory = remote_parent(remote_path)

            dir_results = self._fs.ensure_directory_chain(directory)
            report.record_directories(dir_results)

            try:
                self._fs.upload(item.content.encode("utf-8"), remote_path)
            except FileTransferError as e:
                logger.warning(f"Upload failed for {remote_path}: {e.reason}")
                if self._fail_fast:
                    raise PublishAbort(
                        f"Upload failed for {remote_path}: {e.reason}",
                        written=len(report.written),
                    ) from e
                report.files.append(PublishedFile(
                    name=item.name, remote_path=remote_path, ok=False, error=e.reason
                ))
                continue

            logger.debug(f"Uploaded {remote_path}")
            report.files.append(PublishedFile(name=item.name, remote_path=remote_path, ok=True))

        return report
