"""Capital partitioning for lowercase-safe keys.

Rows are split by whether their raw line carries any uppercase letter.
A key is safe to treat as lowercase-canonical only when no row producing
it is capitalized anywhere in the same source:

    safe = keys(lowercase rows) - keys(capitalized rows)
"""

from dataclasses import dataclass, field
from typing import Iterable

from ..normalizer import CutoffRule, EntryRule, FilterRule, contains_capital
from ..schema import DictionaryRow, TextCodeEntry


@dataclass
class CapitalPartition:
    """Keys of lowercase rows and of capitalized rows, kept apart."""

    cutoff_rule: CutoffRule = CutoffRule.NONE
    lower: set[str] = field(default_factory=set)
    capital: set[str] = field(default_factory=set)
    # Lowercase row behind each lower key, last one wins
    entries: dict[str, TextCodeEntry] = field(default_factory=dict)

    @property
    def rule(self) -> EntryRule:
        return EntryRule(FilterRule.CAPITAL_SPLIT, self.cutoff_rule)

    def add(self, row: DictionaryRow) -> str:
        """Route a row into one accumulator and return its key."""
        key = self.rule.key(row.text, row.code)
        if contains_capital(row.line):
            self.capital.add(key)
        else:
            self.lower.add(key)
            self.entries[key] = row.to_entry()
        return key

    def add_rows(self, rows: Iterable[DictionaryRow]) -> "CapitalPartition":
        for row in rows:
            self.add(row)
        return self

    def safe_keys(self) -> set[str]:
        """Keys only ever seen in lowercase rows."""
        return self.lower - self.capital

    def safe_entries(self) -> dict[str, TextCodeEntry]:
        """Lowercase entries restricted to the safe keys."""
        return {
            key: entry for key, entry in self.entries.items()
            if key not in self.capital
        }


def partition_by_capital(
    rows: Iterable[DictionaryRow],
    cutoff_rule: CutoffRule = CutoffRule.NONE,
) -> CapitalPartition:
    """Split rows into lowercase and capitalized key sets.

    Args:
        rows: Dictionary rows.
        cutoff_rule: Separator removal used for keys.

    Returns:
        Filled CapitalPartition.
    """
    return CapitalPartition(cutoff_rule=cutoff_rule).add_rows(rows)


def build_safe_keys(
    rows: Iterable[DictionaryRow],
    cutoff_rule: CutoffRule = CutoffRule.NONE,
) -> set[str]:
    """Keys with no capitalized variant anywhere in rows."""
    return partition_by_capital(rows, cutoff_rule).safe_keys()
