"""Dictionary indexing by normalization key.

Builds the lookup structures used to compare dictionaries:
- Key sets: every normalized key of a dictionary
- Key maps: key → distinct original variants producing it
- Text sets: first-column texts, for dictionaries compared by text only
"""

from typing import Iterable

from ..normalizer import EntryRule, FilterRule
from ..schema import DictionaryRow, Entry, PlainKeyEntry
from .partition import partition_by_capital


def build_text_set(rows: Iterable[DictionaryRow]) -> set[str]:
    """Collect the text column of every row."""
    return {row.text for row in rows}


def build_key_set(rows: Iterable[DictionaryRow], rule: EntryRule) -> set[str]:
    """Build the set of normalization keys of a dictionary.

    LOWERCASE_ONLY drops rows with any uppercase letter. CAPITAL_SPLIT
    returns only keys never produced by a capitalized row.

    Args:
        rows: Dictionary rows after the marker.
        rule: Filter/cutoff pair.

    Returns:
        Set of keys.
    """
    if rule.filter_rule is FilterRule.CAPITAL_SPLIT:
        return partition_by_capital(rows, rule.cutoff_rule).safe_keys()

    keys: set[str] = set()
    for row in rows:
        if not rule.accepts(row.line):
            continue
        keys.add(rule.key(row.text, row.code))
    return keys


def build_key_map(
    rows: Iterable[DictionaryRow],
    rule: EntryRule,
    text_only: bool = False,
) -> dict[str, set[Entry]]:
    """Group rows by normalization key.

    Each group keeps the original (not normalized) variants, so casing of
    the specific rows behind a key can be inspected later.

    Args:
        rows: Dictionary rows after the marker.
        rule: Filter/cutoff pair.
        text_only: Keep PlainKeyEntry(text) instead of TextCodeEntry.

    Returns:
        Mapping of key → set of variants.
    """
    groups: dict[str, set[Entry]] = {}
    for row in rows:
        if not rule.accepts(row.line):
            continue

        key = rule.key(row.text, row.code)
        entry = PlainKeyEntry(row.text) if text_only else row.to_entry()
        groups.setdefault(key, set()).add(entry)
    return groups
