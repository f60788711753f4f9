"""Base line source interface for dictionary files.

All sources inherit from Source and implement the parse() method.
This provides a consistent API for reading data lines from any file layout.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional


@dataclass
class SourceStats:
    """Counters collected while reading a source file."""

    source_path: str
    total_lines: int = 0    # Physical lines read
    total_rows: int = 0     # Lines handed on to the caller
    skipped: int = 0        # Data lines dropped as malformed or duplicate
    errors: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"SourceStats({Path(self.source_path).name}: "
            f"{self.total_rows}/{self.total_lines} rows, "
            f"{self.skipped} skipped)"
        )


class Source(ABC):
    """Base class for line sources.

    Subclasses must implement:
        - parse(filepath) -> Iterator of (line, line_number) tuples

    Files are opened lazily and closed when iteration finishes. A missing
    file raises FileNotFoundError on first iteration.
    """

    def __init__(self, comment_char: str = "#"):
        """Initialize source.

        Args:
            comment_char: Prefix marking a comment line.
        """
        self.comment_char = comment_char
        self.stats: Optional[SourceStats] = None

    @abstractmethod
    def parse(self, filepath: Path) -> Iterator[tuple[str, int]]:
        """Read a file and yield its data lines.

        Args:
            filepath: Path to source file.

        Yields:
            Tuples of (line, line_number), newline stripped.
        """
        pass

    def is_comment(self, line: str) -> bool:
        """Check if a line is blank or a comment."""
        stripped = line.strip()
        return not stripped or stripped.startswith(self.comment_char)

    def _open(self, filepath: Path | str) -> Iterator[tuple[str, int]]:
        """Yield (line, line_number) for every physical line and track stats."""
        filepath = Path(filepath)
        self.stats = SourceStats(source_path=str(filepath.resolve()))
        with open(filepath, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                self.stats.total_lines += 1
                yield line.rstrip("\r\n"), line_num

    def report(self, message: str) -> None:
        """Record a skipped line."""
        if self.stats is not None:
            self.stats.skipped += 1
            self.stats.errors.append(message)
