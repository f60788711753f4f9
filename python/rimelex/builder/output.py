"""Plain text writers for index results.

Everything is written one record per line, tab-joined, in a fixed order
so that re-running on unchanged input gives identical files.
"""

from pathlib import Path
from typing import Iterable, Mapping

from ..schema import Entry, PlainKeyEntry, TextCodeEntry


def format_entry(entry: Entry) -> str:
    """Render a variant as 'text<TAB>code' or 'text'."""
    if isinstance(entry, TextCodeEntry):
        return f"{entry.text}\t{entry.code}"
    if isinstance(entry, PlainKeyEntry):
        return entry.text
    raise TypeError(f"Not an entry: {entry!r}")


def format_groups(groups: Mapping[str, set[Entry]]) -> list[str]:
    """Render groups as 'key<TAB>variant<TAB>variant...' lines.

    Keys and variants are sorted; variant fields keep their own tabs.
    """
    lines = []
    for key in sorted(groups):
        variants = sorted(format_entry(e) for e in groups[key])
        lines.append("\t".join([key, *variants]))
    return lines


def write_lines(filepath: Path | str, lines: Iterable[str]) -> int:
    """Write lines to a UTF-8 file, creating parent directories.

    Args:
        filepath: Output file.
        lines: Records without newlines.

    Returns:
        Number of lines written.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(filepath, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
            count += 1
    return count
