"""Index builder module.

Builds the in-memory structures used to compare and extend dictionaries:
- Key sets and key → variant groups (index)
- Lowercase-safe keys (partition)
- Conflict review groups (groups)
- Acronym expansion rows (acronym)
- Lookup tables over a Rime directory (tables)
"""

from .acronym import AcronymExpander, expand_acronyms, read_acronyms
from .groups import GroupPolicy, filter_groups, has_capital_start
from .index import build_key_map, build_key_set, build_text_set
from .partition import CapitalPartition, build_safe_keys, partition_by_capital
from .tables import DictionarySpec, LookupTables, load_tables

__all__ = [
    "AcronymExpander",
    "expand_acronyms",
    "read_acronyms",
    "GroupPolicy",
    "filter_groups",
    "has_capital_start",
    "build_key_map",
    "build_key_set",
    "build_text_set",
    "CapitalPartition",
    "build_safe_keys",
    "partition_by_capital",
    "DictionarySpec",
    "LookupTables",
    "load_tables",
]
