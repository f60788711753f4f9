"""Rime dictionary source.

Parses the data section of Rime .dict.yaml files.

Format:
    ---                 # YAML header (never parsed)
    name: en
    ...
    # +_+               # Marker: data starts on the next line
    text<TAB>code<TAB>weight
    text<TAB>code

Only lines strictly after the marker are rows. Blank and comment lines in
the data section are skipped silently.
"""

from pathlib import Path
from typing import Iterator, Optional

from ..schema import MARKER, DictionaryRow, MalformedRowError
from .base import Source


class RimeDictSource(Source):
    """Source for marker-delimited Rime dictionaries."""

    def __init__(
        self,
        marker: str = MARKER,
        comment_char: str = "#",
        strict: bool = False,
    ):
        """Initialize source.

        Args:
            marker: Line separating metadata from data.
            comment_char: Prefix marking a comment line.
            strict: Raise on malformed rows or a missing marker instead of
                recording them.
        """
        super().__init__(comment_char)
        self.marker = marker
        self.strict = strict

    def parse(self, filepath: Path) -> Iterator[tuple[str, int]]:
        """Yield data lines after the marker.

        Args:
            filepath: Path to dictionary file.

        Yields:
            Tuples of (line, line_number).
        """
        found_marker = False
        for line, line_num in self._open(filepath):
            if not found_marker:
                found_marker = line.rstrip() == self.marker
                continue

            if self.is_comment(line):
                continue

            yield line, line_num

        if not found_marker:
            message = f"marker {self.marker!r} not found"
            if self.strict:
                raise ValueError(message)
            self.stats.errors.append(message)

    def rows(self, filepath: Path | str) -> Iterator[DictionaryRow]:
        """Parse data lines into rows.

        Malformed lines are recorded in stats.errors and skipped, or raised
        as MalformedRowError when strict.

        Args:
            filepath: Path to dictionary file.

        Yields:
            DictionaryRow for each well-formed data line.
        """
        for line, line_num in self.parse(Path(filepath)):
            try:
                row = DictionaryRow.parse(line, line_number=line_num)
            except MalformedRowError as e:
                if self.strict:
                    raise
                self.report(str(e))
                continue

            self.stats.total_rows += 1
            yield row


def read_rows(
    filepath: Path | str,
    marker: str = MARKER,
    comment_char: str = "#",
    strict: Optional[bool] = None,
    errors: Optional[list[str]] = None,
) -> Iterator[DictionaryRow]:
    """Convenience function to iterate the rows of a Rime dictionary.

    Without an errors list the source is strict, so a malformed row or a
    missing marker raises instead of vanishing.

    Args:
        filepath: Path to dictionary file.
        marker: Line separating metadata from data.
        comment_char: Prefix marking a comment line.
        strict: Raise on malformed rows (default: errors is None).
        errors: Optional list receiving diagnostics of skipped lines.

    Yields:
        DictionaryRow for each well-formed data line.
    """
    if strict is None:
        strict = errors is None
    source = RimeDictSource(marker=marker, comment_char=comment_char, strict=strict)
    try:
        yield from source.rows(filepath)
    finally:
        if errors is not None and source.stats is not None:
            errors.extend(source.stats.errors)
