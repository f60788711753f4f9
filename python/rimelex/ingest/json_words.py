"""JSON-lines word list extraction.

Pulls headwords out of a dictionary export where each line is a JSON
object whose keys are '|'-separated word variants:

    {"colour|color": {...}}
    ## comment
    {"grey|gray": {...}}

→ colour, color, grey, gray
"""

import json
from pathlib import Path


def split_key(key: str) -> list[str]:
    """Split a '|'-joined key into trimmed, non-empty words."""
    return [w.strip() for w in key.split("|") if w.strip()]


def extract_words(filepath: Path | str) -> list[str]:
    """Collect headwords from a JSON-lines file.

    Args:
        filepath: Path to JSON-lines export.

    Returns:
        Words in file order (duplicates kept).

    Raises:
        ValueError: If a line is not a JSON object.
    """
    words: list[str] = []
    with open(filepath, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, start=1):
            if line.startswith("##") or not line.strip():
                continue

            try:
                entry = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"line {line_num}: invalid JSON: {e}") from e
            if not isinstance(entry, dict):
                raise ValueError(f"line {line_num}: expected a JSON object")

            for key in entry:
                words.extend(split_key(key))
    return words
