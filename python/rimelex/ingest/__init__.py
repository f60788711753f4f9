"""Dictionary source module.

Provides pluggable line sources for the file layouts rimelex reads:
- Rime .dict.yaml files (data after the '# +_+' marker)
- Plain text record lists (acronym definitions)
- JSON-lines dictionary exports (headword extraction)

Usage:
    from rimelex.ingest import rime, plain_text

    errors = []
    rows = rime.read_rows("en_dicts/en.dict.yaml", errors=errors)
    lines = plain_text.read_lines("others/en_acronym.txt")
"""

from .base import Source, SourceStats
from . import json_words
from . import plain_text
from . import rime

__all__ = [
    "Source",
    "SourceStats",
    "json_words",
    "plain_text",
    "rime",
]
