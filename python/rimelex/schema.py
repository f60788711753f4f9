"""Row and entry data structures for rimelex.

Core concept:
    - Dictionary rows are parsed from tab-delimited lines after the marker
    - Rows normalize to keys (see normalizer)
    - Groups collect the distinct original entries behind one key

Example:
    "Apple\\tAPPL" + "apple\\tappl" → key "appleappl"
    Group: {TextCodeEntry("Apple", "APPL"), TextCodeEntry("apple", "appl")}
"""

from dataclasses import dataclass, field
from typing import Optional, Union

MARKER = "# +_+"  # Data rows start after this line


class MalformedRowError(ValueError):
    """A dictionary line lacks the required text and code fields."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


@dataclass(frozen=True)
class PlainKeyEntry:
    """A variant identified by its original text only."""

    text: str


@dataclass(frozen=True)
class TextCodeEntry:
    """A variant identified by its original text and code."""

    text: str
    code: str


Entry = Union[PlainKeyEntry, TextCodeEntry]


def entry_text(entry: Entry) -> str:
    """Get the display text of an entry of either kind."""
    if isinstance(entry, (PlainKeyEntry, TextCodeEntry)):
        return entry.text
    raise TypeError(f"Not an entry: {entry!r}")


@dataclass
class DictionaryRow:
    """One data line of a Rime dictionary."""

    text: str                           # Display text, as written
    code: str                           # Encoding, as written
    weight: Optional[int] = None        # Trailing integer field, if any
    fields: tuple[str, ...] = ()        # All tab fields of the line
    line_number: Optional[int] = None   # Line in source file (if applicable)
    raw: str = ""                       # Original line without newline

    @property
    def line(self) -> str:
        """Raw line, rebuilt from columns when the row was made by hand."""
        if self.raw:
            return self.raw
        if self.fields:
            return "\t".join(self.fields)
        parts = [self.text, self.code]
        if self.weight is not None:
            parts.append(str(self.weight))
        return "\t".join(parts)

    def to_entry(self) -> TextCodeEntry:
        """Get the (text, code) variant of this row."""
        return TextCodeEntry(self.text, self.code)

    @classmethod
    def parse(cls, line: str, line_number: Optional[int] = None) -> "DictionaryRow":
        """Parse a tab-delimited line.

        Args:
            line: Raw line (trailing newline is ignored).
            line_number: Position in the source file.

        Returns:
            Parsed row.

        Raises:
            MalformedRowError: If text or code is missing or blank.
        """
        line = line.rstrip("\r\n")
        fields = tuple(line.split("\t"))
        if len(fields) < 2:
            raise MalformedRowError(f"missing code field: {line!r}", line_number)

        text, code = fields[0], fields[1]
        if not text.strip() or not code.strip():
            raise MalformedRowError(f"empty text or code: {line!r}", line_number)

        weight = None
        if len(fields) > 2:
            try:
                weight = int(fields[-1])
            except ValueError:
                weight = None

        return cls(
            text=text,
            code=code,
            weight=weight,
            fields=fields,
            line_number=line_number,
            raw=line,
        )


@dataclass(frozen=True)
class AcronymEntry:
    """An abbreviation and its expansions, in source order."""

    abbreviation: str
    expansions: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, line: str) -> Optional["AcronymEntry"]:
        """Parse 'abbrev<TAB>expansion<TAB>...'; None if there is no expansion."""
        parts = line.strip().split("\t")
        expansions = tuple(p for p in parts[1:] if p.strip())
        if not parts[0] or not expansions:
            return None
        return cls(abbreviation=parts[0], expansions=expansions)
