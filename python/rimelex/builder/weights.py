"""In-place weight rewriting for Rime dictionaries.

Every data row after the marker gets the given weight: an existing
trailing integer is replaced, otherwise one is appended.

    hello<TAB>hello          → hello<TAB>hello<TAB>100
    world<TAB>world<TAB>5    → world<TAB>world<TAB>100
"""

from dataclasses import dataclass
from pathlib import Path

from ..schema import MARKER


@dataclass
class WeightStats:
    """Counts from a weight rewrite."""

    replaced: int = 0
    appended: int = 0

    @property
    def total(self) -> int:
        return self.replaced + self.appended


def _set_weight(line: str, weight: int) -> tuple[str, bool]:
    """Return (new line, whether an existing weight was replaced)."""
    parts = line.split("\t")
    try:
        int(parts[-1])
    except ValueError:
        return f"{line}\t{weight}", False
    return "\t".join(parts[:-1] + [str(weight)]), True


def rewrite_weights(
    lines: list[str],
    weight: int,
    marker: str = MARKER,
    comment_char: str = "#",
    stats: WeightStats | None = None,
) -> list[str]:
    """Set the weight of every data line.

    Lines up to and including the marker, blank lines and comment lines
    are returned unchanged.

    Args:
        lines: File lines without newlines.
        weight: Weight to set.
        marker: Line separating metadata from data.
        comment_char: Prefix marking a comment line.
        stats: Optional counters to update.

    Returns:
        New list of lines, same length and order.
    """
    result = []
    found_marker = False
    for line in lines:
        if not found_marker:
            found_marker = line.rstrip() == marker
            result.append(line)
            continue

        stripped = line.strip()
        if not stripped or stripped.startswith(comment_char):
            result.append(line)
            continue

        line, replaced = _set_weight(line.rstrip("\r"), weight)
        if stats is not None:
            if replaced:
                stats.replaced += 1
            else:
                stats.appended += 1
        result.append(line)
    return result


def add_weight(
    filepath: Path | str,
    weight: int,
    marker: str = MARKER,
    comment_char: str = "#",
) -> WeightStats:
    """Rewrite the weights of a dictionary file in place.

    Args:
        filepath: Dictionary file.
        weight: Weight to set.
        marker: Line separating metadata from data.
        comment_char: Prefix marking a comment line.

    Returns:
        WeightStats with replaced/appended counts.
    """
    filepath = Path(filepath)
    text = filepath.read_text(encoding="utf-8")

    stats = WeightStats()
    # split("\n") keeps a trailing empty element, so the final newline survives
    lines = rewrite_weights(text.split("\n"), weight, marker, comment_char, stats)
    filepath.write_text("\n".join(lines), encoding="utf-8")
    return stats
