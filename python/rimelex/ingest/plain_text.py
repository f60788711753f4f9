"""Plain text line source.

Simple format: one record per line.
Supports comments with # and empty lines.

Use for:
- Acronym definition files (abbrev<TAB>expansion...)
- Any simple record-per-line format without a marker
"""

from pathlib import Path
from typing import Iterator

from .base import Source


class PlainTextSource(Source):
    """Source for plain text record lists."""

    def parse(self, filepath: Path) -> Iterator[tuple[str, int]]:
        """Parse plain text list.

        Args:
            filepath: Path to text file.

        Yields:
            Tuples of (trimmed line, line_number).
        """
        for line, line_num in self._open(filepath):
            # Skip empty lines and comments
            if self.is_comment(line):
                continue

            self.stats.total_rows += 1
            yield line.strip(), line_num


def read_lines(filepath: Path | str, comment_char: str = "#") -> Iterator[str]:
    """Convenience function to iterate the records of a plain text file.

    Args:
        filepath: Path to text file.
        comment_char: Character that starts a comment.

    Yields:
        Trimmed, non-comment lines.
    """
    source = PlainTextSource(comment_char=comment_char)
    for line, _ in source.parse(Path(filepath)):
        yield line
