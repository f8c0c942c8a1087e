"""HotfixAI sync backend: FTP/SFTP remote file-tree synchronization."""

__version__ = "0.1.0"
