"""Remote Tree Walker - pulls text assets out of a remote directory tree.

The walk is depth-first in per-directory listing order: a subdirectory is
walked completely before the entry that follows it in its parent's listing.
It runs on an explicit stack of (directory, entry iterator) frames, so deep
trees do not consume Python stack, and directories already visited are not
entered twice.

Failure policy is fail-open for files: a file that cannot be downloaded or
decoded is left out of the result and the walk continues. A directory that
cannot be listed fails the whole walk.
"""

import logging
from typing import Iterable, Iterator, List, Set, Tuple

from .errors import FileTransferError
from .models import EntryKind, FetchedFile, RemoteEntry, WalkResult
from .paths import (
    DEFAULT_EXTENSIONS,
    canonical_dir,
    has_allowed_extension,
    normalize_extensions,
)
from .ports import RemoteFileSystemPort

logger = logging.getLogger(__name__)


class RemoteTreeWalker:
    """Walk a remote tree and fetch every allow-listed regular file.

    Example:
        with create_remote_fs(credentials, timeout=15) as fs:
            result = RemoteTreeWalker(fs).walk("/public_html")
        names = [f.name for f in result.files]
    """

    def __init__(
        self,
        remote_fs: RemoteFileSystemPort,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ):
        self._fs = remote_fs
        self._extensions = normalize_extensions(extensions)

    def walk(self, start_dir: str = "/") -> WalkResult:
        """Fetch all matching files below start_dir.

        Args:
            start_dir: Remote directory to start from (default "/")

        Returns:
            WalkResult whose files are in visit order

        Raises:
            RemoteOperationError: If any directory cannot be listed
        """
        start_dir = start_dir or "/"
        result = WalkResult()
        visited: Set[str] = {canonical_dir(start_dir)}
        stack: List[Tuple[str, Iterator[RemoteEntry]]] = [self._open(start_dir, result)]

        while stack:
            _, entries = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            if entry.kind is EntryKind.DIRECTORY:
                key = canonical_dir(entry.full_path)
                if key in visited:
                    logger.warning(f"Skipping already visited directory: {entry.full_path}")
                    continue
                visited.add(key)
                stack.append(self._open(entry.full_path, result))
            elif entry.kind is EntryKind.FILE:
                self._fetch(entry, result)
            elif entry.kind is EntryKind.SYMLINK:
                result.skipped_symlinks += 1
                logger.debug(f"Skipping symlink: {entry.full_path}")
            else:
                logger.debug(f"Skipping special entry: {entry.full_path}")

        return result

    def _open(self, directory: str, result: WalkResult) -> Tuple[str, Iterator[RemoteEntry]]:
        entries = self._fs.list_dir(directory)
        result.directories_visited += 1
        return directory, iter(entries)

    def _fetch(self, entry: RemoteEntry, result: WalkResult) -> None:
        if not has_allowed_extension(entry.name, self._extensions):
            result.filtered_out += 1
            return

        try:
            content = self._fs.download(entry.full_path).decode("utf-8")
        except (FileTransferError, UnicodeDecodeError) as e:
            result.failed_paths.append(entry.full_path)
            logger.warning(f"Skipping unreadable file {entry.full_path}: {e}")
            return

        result.files.append(FetchedFile(name=canonical_dir(entry.full_path).lstrip("/"), content=content))
