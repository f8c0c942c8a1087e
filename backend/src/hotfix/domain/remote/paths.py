"""Remote path helpers.

Remote paths are always "/"-separated regardless of the local platform.
"""

from typing import Iterable, List

from .errors import InputError

DEFAULT_EXTENSIONS = frozenset({"html", "htm", "css", "js"})


def join_remote(parent: str, name: str) -> str:
    """Join a directory and an entry name with exactly one separator.

    Example:
        join_remote("/", "a") -> "/a"
        join_remote("/site", "a") -> "/site/a"
    """
    if parent.endswith("/"):
        return parent + name
    return parent + "/" + name


def strip_leading_slashes(path: str) -> str:
    return path.lstrip("/")


def canonical_dir(path: str) -> str:
    """Absolute remote path with empty and "." segments dropped.

    Keys the walker's visited set and names fetched files.
    """
    parts = [p for p in path.split("/") if p and p != "."]
    return "/" + "/".join(parts)


def normalize_relative_name(name: str) -> str:
    """Normalize a file name received for publishing.

    Collapses duplicate separators and "." segments and strips leading
    slashes. Names with ".." segments would escape the base directory and
    are rejected.

    Raises:
        InputError: If the name is empty or contains a ".." segment
    """
    parts = []
    for part in (name or "").replace("\\", "/").split("/"):
        if not part or part == ".":
            continue
        if part == "..":
            raise InputError(f"invalid file name (path escape): {name}")
        parts.append(part)
    if not parts:
        raise InputError(f"invalid file name: {name!r}")
    return "/".join(parts)


def build_remote_target(base: str, name: str) -> str:
    """Absolute remote path for a file published under base.

    The base keeps exactly one separator on each side:
        build_remote_target("/root/", "a/b.css") -> "/root/a/b.css"
        build_remote_target("/", "/a.css") -> "/a.css"
    """
    trimmed = (base or "").strip("/")
    prefix = trimmed + "/" if trimmed else ""
    return "/" + prefix + strip_leading_slashes(name)


def remote_parent(path: str) -> str:
    """Directory part of a remote path ("/" for top-level entries)."""
    idx = path.rfind("/")
    return path[:idx] or "/"


def ancestor_prefixes(directory: str) -> List[str]:
    """Every prefix of directory from the root down.

    Example:
        ancestor_prefixes("/root/a/b") -> ["/root", "/root/a", "/root/a/b"]
    """
    prefixes = []
    current = ""
    for part in directory.split("/"):
        if not part:
            continue
        current += "/" + part
        prefixes.append(current)
    return prefixes


def normalize_extensions(extensions: Iterable[str]) -> frozenset:
    return frozenset(ext.lower().lstrip(".") for ext in extensions if ext)


def has_allowed_extension(name: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> bool:
    """True if the lowercased name ends with one of the extensions."""
    lower = name.lower()
    if "." not in lower:
        return False
    return lower.rsplit(".", 1)[1] in extensions
