"""Value objects for remote tree synchronization.

Credentials are transient: built per request, used for one
connect/operate/disconnect cycle, never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class RemoteProtocol(str, Enum):
    """Transfer protocol."""
    FTP = "ftp"
    SFTP = "sftp"


class EntryKind(str, Enum):
    """Kind of a directory listing entry."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class DirectoryStatus(str, Enum):
    """Outcome of ensuring a single directory in a chain."""
    EXISTED = "existed"
    CREATED = "created"
    FAILED = "failed"


@dataclass
class Credentials:
    """Connection parameters for one remote operation.

    Attributes:
        host: Remote hostname (trimmed, non-empty)
        port: Remote port
        username: Login name (may be empty)
        password: Login password (may be empty, never logged)
        base_path: Remote base directory
        protocol: FTP or SFTP
    """
    host: str
    port: int
    username: str = ""
    password: str = field(default="", repr=False)
    base_path: str = "/"
    protocol: RemoteProtocol = RemoteProtocol.FTP

    def describe(self) -> Dict[str, Any]:
        """Log-safe view of the credentials."""
        return {
            "host": self.host,
            "port": self.port,
            "username": "(provided)" if self.username else "(empty)",
            "password": "(provided)" if self.password else "(empty)",
            "protocol": self.protocol.value,
            "path": self.base_path,
        }


@dataclass
class RemoteEntry:
    """One entry of a remote directory listing."""
    name: str
    full_path: str
    kind: EntryKind


@dataclass
class FetchedFile:
    """A text file pulled from (or pushed to) the remote tree.

    name is a relative, "/"-separated path without a leading slash.
    """
    name: str
    content: str


@dataclass
class DirectoryResult:
    """Outcome for one ancestor directory of a publish target."""
    path: str
    status: DirectoryStatus
    error: Optional[str] = None


@dataclass
class PublishedFile:
    """Outcome for one file of a publish batch."""
    name: str
    remote_path: str
    ok: bool
    error: Optional[str] = None


@dataclass
class WalkResult:
    """Result of walking a remote tree.

    Only files is returned to callers; the other fields feed logs and metrics.
    """
    files: List[FetchedFile] = field(default_factory=list)
    failed_paths: List[str] = field(default_factory=list)
    skipped_symlinks: int = 0
    filtered_out: int = 0
    directories_visited: int = 0


@dataclass
class PublishReport:
    """Per-file and per-directory outcome of a publish batch."""
    files: List[PublishedFile] = field(default_factory=list)
    directories: List[DirectoryResult] = field(default_factory=list)

    @property
    def written(self) -> List[PublishedFile]:
        return [f for f in self.files if f.ok]

    @property
    def failed(self) -> List[PublishedFile]:
        return [f for f in self.files if not f.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def record_directories(self, results: List[DirectoryResult]) -> None:
        """Merge directory results, one entry per path.

        A later created/failed outcome replaces an earlier "existed" one.
        """
        index = {d.path: i for i, d in enumerate(self.directories)}
        for result in results:
            pos = index.get(result.path)
            if pos is None:
                index[result.path] = len(self.directories)
                self.directories.append(result)
            elif self.directories[pos].status is DirectoryStatus.EXISTED:
                self.directories[pos] = result
