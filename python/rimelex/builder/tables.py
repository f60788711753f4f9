"""Lookup tables over a Rime configuration directory.

Loads a set of dictionaries once and exposes the structures the checking
and sorting steps compare against:

    text_sets      name → set of first-column texts   (no rule)
    key_sets       name → set of normalization keys   (rule)
    review_groups  name → groups kept by REVIEW       (rule)
    safe_entries   name → key → lowercase-only entry  (CAPITAL_SPLIT rule)

Tables are built by an explicit load_tables() call and passed around; there
is no module-level cache.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..ingest.base import SourceStats
from ..ingest.rime import RimeDictSource
from ..normalizer import EntryRule, FilterRule
from ..schema import MARKER, Entry, TextCodeEntry
from .groups import GroupPolicy, filter_groups
from .index import build_key_map, build_key_set, build_text_set
from .partition import partition_by_capital


@dataclass(frozen=True)
class DictionarySpec:
    """A dictionary to load and how to key it."""

    name: str
    path: str                        # Relative to the Rime directory
    rule: Optional[EntryRule] = None  # None = compare by text only

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "DictionarySpec":
        """Create from a config entry {path, filter?, cutoff?}."""
        rule = None
        if "filter" in data or "cutoff" in data:
            rule = EntryRule.from_dict(data)
        return cls(name=name, path=data["path"], rule=rule)


@dataclass
class LookupTables:
    """Indexed dictionaries for one run."""

    rime_dir: str
    text_sets: dict[str, set[str]] = field(default_factory=dict)
    key_sets: dict[str, set[str]] = field(default_factory=dict)
    review_groups: dict[str, dict[str, set[Entry]]] = field(default_factory=dict)
    safe_entries: dict[str, dict[str, TextCodeEntry]] = field(default_factory=dict)
    stats: dict[str, list[SourceStats]] = field(default_factory=dict)

    def names(self) -> list[str]:
        """Get names of all loaded dictionaries."""
        return sorted(set(self.text_sets) | set(self.key_sets))

    def size(self, name: str) -> int:
        """Number of distinct texts or keys in a loaded dictionary."""
        if name in self.text_sets:
            return len(self.text_sets[name])
        return len(self.key_sets[name])

    def errors(self) -> list[str]:
        """All row diagnostics, prefixed by dictionary name."""
        return [
            f"{name}: {error}"
            for name in sorted(self.stats)
            for stat in self.stats[name]
            for error in stat.errors
        ]


class TableLoader:
    """Reads dictionaries from a Rime directory into LookupTables."""

    def __init__(
        self,
        rime_dir: Path | str,
        marker: str = MARKER,
        comment_char: str = "#",
        strict: bool = False,
    ):
        """Initialize loader.

        Args:
            rime_dir: Base directory dictionary paths are relative to.
            marker: Line separating metadata from data.
            comment_char: Prefix marking a comment line.
            strict: Raise on malformed rows instead of skipping them.
        """
        self.rime_dir = Path(rime_dir)
        self.marker = marker
        self.comment_char = comment_char
        self.strict = strict

    def _rows(self, spec: DictionarySpec, tables: LookupTables):
        source = RimeDictSource(self.marker, self.comment_char, self.strict)
        rows = list(source.rows(self.rime_dir / spec.path))
        tables.stats.setdefault(spec.name, []).append(source.stats)
        return rows

    def load_one(self, spec: DictionarySpec, tables: LookupTables) -> None:
        """Index a single dictionary into tables."""
        rows = self._rows(spec, tables)

        if spec.rule is None:
            tables.text_sets[spec.name] = build_text_set(rows)
            return

        tables.key_sets[spec.name] = build_key_set(rows, spec.rule)
        groups = build_key_map(rows, spec.rule)
        tables.review_groups[spec.name] = filter_groups(groups, GroupPolicy.REVIEW)
        if spec.rule.filter_rule is FilterRule.CAPITAL_SPLIT:
            partition = partition_by_capital(rows, spec.rule.cutoff_rule)
            tables.safe_entries[spec.name] = partition.safe_entries()

    def load(self, specs: list[DictionarySpec]) -> LookupTables:
        """Index every dictionary in specs.

        Raises:
            FileNotFoundError: If a dictionary file is missing.
        """
        tables = LookupTables(rime_dir=str(self.rime_dir))
        for spec in specs:
            self.load_one(spec, tables)
        return tables


def load_tables(
    rime_dir: Path | str,
    specs: list[DictionarySpec],
    marker: str = MARKER,
    strict: bool = False,
) -> LookupTables:
    """Convenience function to build lookup tables.

    Args:
        rime_dir: Base directory of the Rime configuration.
        specs: Dictionaries to load.
        marker: Line separating metadata from data.
        strict: Raise on malformed rows.

    Returns:
        LookupTables for this run.
    """
    return TableLoader(rime_dir, marker=marker, strict=strict).load(specs)
