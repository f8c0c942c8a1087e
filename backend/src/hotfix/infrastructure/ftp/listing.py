"""FTP directory listing parsers.

MLSD gives machine-readable facts; servers without MLSD only offer LIST,
whose format is not standardized. Two LIST dialects are understood:

    Unix ls -l:  drwxr-xr-x   2 owner group  4096 Jan 01 12:00 css
                 lrwxrwxrwx   1 owner group    11 Jan 01  2024 www -> public_html
    DOS / IIS:   01-01-24  12:00PM       <DIR>          css
                 01-01-24  12:00PM                 1234 index.html

Rows that match neither dialect become EntryKind.OTHER so the walker
skips them.
"""

import re
from typing import Dict, Iterable, List, Optional

from ...domain.remote.models import EntryKind, RemoteEntry
from ...domain.remote.paths import join_remote

_UNIX_LINE = re.compile(
    r"^(?P<type>[\-dlbcps])\S{9,}\s+\d+\s+.*?\s+"
    r"(?P<month>[A-Za-z]{3})\s+(?P<day>\d{1,2})\s+(?P<time>\d{1,2}:\d{2}|\d{4})\s+"
    r"(?P<name>.+)$"
)

_DOS_LINE = re.compile(
    r"^(?P<date>\d{2}-\d{2}-\d{2,4})\s+(?P<time>\d{1,2}:\d{2}\s*(?:AM|PM)?)\s+"
    r"(?P<size><DIR>|\d+)\s+(?P<name>.+)$",
    re.IGNORECASE,
)

_UNIX_KINDS = {
    "-": EntryKind.FILE,
    "d": EntryKind.DIRECTORY,
    "l": EntryKind.SYMLINK,
}


def entry_from_facts(directory: str, name: str, facts: Dict[str, str]) -> Optional[RemoteEntry]:
    """Build an entry from one MLSD row. Returns None for "." and ".."."""
    kind_fact = facts.get("type", "").lower()
    if name in (".", "..") or kind_fact in ("cdir", "pdir"):
        return None

    if kind_fact == "dir":
        kind = EntryKind.DIRECTORY
    elif kind_fact == "file":
        kind = EntryKind.FILE
    elif kind_fact.startswith("os.unix=slink") or kind_fact == "os.unix=symlink":
        kind = EntryKind.SYMLINK
    else:
        kind = EntryKind.OTHER

    return RemoteEntry(name=name, full_path=join_remote(directory, name), kind=kind)


def parse_list_line(directory: str, line: str) -> Optional[RemoteEntry]:
    """Parse one LIST row. Returns None for blank, "total" and dot rows."""
    line = line.rstrip("\r\n")
    if not line.strip() or line.lower().startswith("total "):
        return None

    match = _UNIX_LINE.match(line)
    if match:
        kind = _UNIX_KINDS.get(match.group("type"), EntryKind.OTHER)
        name = match.group("name")
        if kind is EntryKind.SYMLINK and " -> " in name:
            name = name.split(" -> ", 1)[0]
    else:
        match = _DOS_LINE.match(line)
        if match:
            is_dir = match.group("size").upper() == "<DIR>"
            kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
            name = match.group("name")
        else:
            name = line.split()[-1]
            kind = EntryKind.OTHER

    if name in (".", ".."):
        return None
    return RemoteEntry(name=name, full_path=join_remote(directory, name), kind=kind)


def parse_list_output(directory: str, lines: Iterable[str]) -> List[RemoteEntry]:
    entries = []
    for line in lines:
        entry = parse_list_line(directory, line)
        if entry is not None:
            entries.append(entry)
    return entries
