"""Group filtering for conflict review.

A group is worth reviewing when several differently written rows collapse
onto one key (ambiguous), or when a variant looks like a proper noun
(capitalized), whose lowercase key would hide it.
"""

from enum import Flag
from typing import Iterable, Mapping

from ..schema import Entry, entry_text


class GroupPolicy(Flag):
    """Which groups filter_groups keeps."""

    AMBIGUOUS = 1
    HAS_CAPITAL_START = 2
    REVIEW = AMBIGUOUS | HAS_CAPITAL_START

    @classmethod
    def parse(cls, name: str) -> "GroupPolicy":
        """Get policy from a CLI/config name."""
        names = {
            "ambiguous": cls.AMBIGUOUS,
            "capital": cls.HAS_CAPITAL_START,
            "has_capital_start": cls.HAS_CAPITAL_START,
            "review": cls.REVIEW,
        }
        key = name.strip().lower().replace("-", "_")
        if key not in names:
            raise ValueError(f"Unknown policy: {name}. Available: {list(names.keys())}")
        return names[key]


def has_capital_start(entries: Iterable[Entry]) -> bool:
    """Check if any variant's text begins with an uppercase letter."""
    for entry in entries:
        text = entry_text(entry)
        if text and text[0].isupper():
            return True
    return False


def is_ambiguous(entries: set[Entry]) -> bool:
    """Check if a group has two or more distinct variants."""
    return len(entries) >= 2


def matches_policy(entries: set[Entry], policy: GroupPolicy) -> bool:
    """Check a group against a policy (flags combine with OR)."""
    if GroupPolicy.AMBIGUOUS in policy and is_ambiguous(entries):
        return True
    if GroupPolicy.HAS_CAPITAL_START in policy and has_capital_start(entries):
        return True
    return False


def filter_groups(
    groups: Mapping[str, set[Entry]],
    policy: GroupPolicy = GroupPolicy.REVIEW,
) -> dict[str, set[Entry]]:
    """Keep the groups matching policy.

    Args:
        groups: Mapping of key → variants, left untouched.
        policy: Retention policy.

    Returns:
        New mapping with copied variant sets.
    """
    return {
        key: set(entries)
        for key, entries in groups.items()
        if matches_policy(entries, policy)
    }
