"""Acronym expansion into dictionary rows.

Each definition line 'NASA<TAB>National Aeronautics and Space Administration'
becomes:

    NASA<TAB>NASA
    National Aeronautics and Space Administration<TAB>NASA
    NationalAeronauticsandSpaceAdministration<TAB>NASA

One self row, then a spaced and a compact row per expansion (1 + 2k rows).
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..ingest.plain_text import PlainTextSource
from ..normalizer import compact
from ..schema import AcronymEntry


def expansion_rows(entry: AcronymEntry) -> list[str]:
    """Build the output rows of one acronym definition."""
    abbr = entry.abbreviation
    rows = [f"{abbr}\t{abbr}"]
    for expansion in entry.expansions:
        rows.append(f"{expansion}\t{abbr}")
        rows.append(f"{compact(expansion)}\t{abbr}")
    return rows


class AcronymExpander:
    """Expands acronym definition lines, skipping exact duplicate lines.

    Every call to entries()/expand() starts with an empty duplicate set.
    Diagnostics of the latest call are kept in errors and duplicates;
    processing always continues.
    """

    def __init__(self, comment_char: str = "#"):
        self.comment_char = comment_char
        self.duplicates = 0
        self.errors: list[str] = []

    def entries(
        self,
        lines: Iterable[str],
        errors: Optional[list[str]] = None,
    ) -> Iterator[AcronymEntry]:
        """Yield one AcronymEntry per new, well-formed line.

        Args:
            lines: Raw definition lines.
            errors: Optional list receiving this call's diagnostics.

        Yields:
            Parsed entries, in input order.
        """
        seen: set[str] = set()
        self.duplicates = 0
        self.errors = errors if errors is not None else []

        for line in lines:
            line = line.strip()
            if not line or line.startswith(self.comment_char):
                continue

            if line in seen:
                self.duplicates += 1
                self.errors.append(f"duplicate acronym definition: {line}")
                continue
            seen.add(line)

            entry = AcronymEntry.parse(line)
            if entry is None:
                self.errors.append(f"no expansion: {line}")
                continue

            empty = len(line.split("\t")) - 1 - len(entry.expansions)
            if empty:
                self.errors.append(f"{empty} empty expansion field(s) ignored: {line}")

            yield entry

    def expand(
        self,
        lines: Iterable[str],
        errors: Optional[list[str]] = None,
    ) -> Iterator[str]:
        """Yield 'key<TAB>abbreviation' rows for every definition line.

        Single forward pass over lines.
        """
        for entry in self.entries(lines, errors):
            yield from expansion_rows(entry)


def expand_acronyms(
    lines: Iterable[str],
    errors: Optional[list[str]] = None,
) -> Iterator[str]:
    """Convenience generator over AcronymExpander.expand.

    Args:
        lines: Raw definition lines.
        errors: Optional list receiving diagnostics.

    Yields:
        Output rows.
    """
    yield from AcronymExpander().expand(lines, errors)


def read_acronyms(
    filepath: Path | str,
    comment_char: str = "#",
) -> tuple[dict[str, list[str]], list[str]]:
    """Expand an acronym file, grouping rows by abbreviation.

    A later definition of the same abbreviation replaces the earlier one.

    Args:
        filepath: Acronym definition file.
        comment_char: Character that starts a comment.

    Returns:
        Tuple of (abbreviation → rows, diagnostics).
    """
    source = PlainTextSource(comment_char=comment_char)
    expander = AcronymExpander(comment_char=comment_char)
    lines = (line for line, _ in source.parse(Path(filepath)))

    result: dict[str, list[str]] = {}
    for entry in expander.entries(lines):
        result[entry.abbreviation] = expansion_rows(entry)
    return result, expander.errors
