"""Key normalization for rimelex.

Maps dictionary rows that differ only in letter case, spacing or hyphenation
onto one canonical key. Two rows with the same key are treated as the same
entry when deduplicating.

Key layout:
    cutoff(filter(text) + lower(code))

Example:
    "Windows XP" / "windows xp" with FIRST_LETTER_LOWER + REMOVE_BOTH
    → "windowsxPwindowsxp"
"""

from dataclasses import dataclass
from enum import Enum


class FilterRule(Enum):
    """Casing transform applied to the text column before keying."""

    NONE = "none"
    LOWERCASE_ONLY = "lowercase_only"          # Row predicate, text untouched
    FIRST_LETTER_LOWER = "first_letter_lower"  # 'Windows XP' -> 'windows xP'
    ALL_LOWER = "all_lower"
    CAPITAL_SPLIT = "capital_split"            # Lowercase, partition by raw casing

    @classmethod
    def parse(cls, value: "str | int | FilterRule") -> "FilterRule":
        """Get FilterRule from a name, value or legacy numeric code (0-4)."""
        if isinstance(value, cls):
            return value
        legacy = {
            0: cls.NONE, 1: cls.LOWERCASE_ONLY, 2: cls.FIRST_LETTER_LOWER,
            3: cls.ALL_LOWER, 4: cls.CAPITAL_SPLIT,
        }
        return _parse_enum(cls, value, legacy)


class CutoffRule(Enum):
    """Separator removal applied to the concatenated key."""

    NONE = "none"
    REMOVE_SPACES = "remove_spaces"
    REMOVE_HYPHENS = "remove_hyphens"
    REMOVE_BOTH = "remove_both"

    @classmethod
    def parse(cls, value: "str | int | CutoffRule") -> "CutoffRule":
        """Get CutoffRule from a name, value or legacy numeric code (0-3)."""
        if isinstance(value, cls):
            return value
        legacy = {
            0: cls.NONE, 1: cls.REMOVE_SPACES,
            2: cls.REMOVE_HYPHENS, 3: cls.REMOVE_BOTH,
        }
        return _parse_enum(cls, value, legacy)


def _parse_enum(cls, value, legacy: dict):
    if isinstance(value, int):
        if value in legacy:
            return legacy[value]
        raise ValueError(f"Unknown {cls.__name__} code: {value}")

    name = str(value).strip().lower().replace("-", "_")
    if name.isdigit():
        return _parse_enum(cls, int(name), legacy)
    for member in cls:
        if member.value == name:
            return member
    raise ValueError(
        f"Unknown {cls.__name__}: {value}. Available: {[m.value for m in cls]}"
    )


@dataclass(frozen=True)
class EntryRule:
    """Filter/cutoff pair used to key a dictionary."""

    filter_rule: FilterRule = FilterRule.NONE
    cutoff_rule: CutoffRule = CutoffRule.NONE

    def key(self, text: str, code: str) -> str:
        """Compute the normalization key of a row under this rule."""
        return normalization_key(text, code, self.filter_rule, self.cutoff_rule)

    def accepts(self, line: str) -> bool:
        """Check the row-level predicate of LOWERCASE_ONLY against a raw line."""
        if self.filter_rule is FilterRule.LOWERCASE_ONLY:
            return is_lowercase(line)
        return True

    @classmethod
    def from_dict(cls, data: dict) -> "EntryRule":
        """Create from a config mapping with optional 'filter'/'cutoff' keys."""
        return cls(
            filter_rule=FilterRule.parse(data.get("filter", FilterRule.NONE)),
            cutoff_rule=CutoffRule.parse(data.get("cutoff", CutoffRule.NONE)),
        )


def apply_cutoff(text: str, cutoff_rule: CutoffRule) -> str:
    """Delete spaces and/or hyphens from text.

    Args:
        text: Text to strip.
        cutoff_rule: Which separators to delete.

    Returns:
        Text without the selected separators.
    """
    if cutoff_rule in (CutoffRule.REMOVE_SPACES, CutoffRule.REMOVE_BOTH):
        text = text.replace(" ", "")
    if cutoff_rule in (CutoffRule.REMOVE_HYPHENS, CutoffRule.REMOVE_BOTH):
        text = text.replace("-", "")
    return text


def compact(phrase: str) -> str:
    """Remove all spaces from a phrase ('Space Administration' → 'SpaceAdministration')."""
    return apply_cutoff(phrase, CutoffRule.REMOVE_SPACES)


def first_letter_to_lower(text: str) -> str:
    """Lowercase only the first letter of each capitalized word.

    Words are split on whitespace and rejoined with single spaces.

    Args:
        text: Text to transform.

    Returns:
        Transformed text, e.g. 'Windows XP' → 'windows xP'.
    """
    words = []
    for word in text.split():
        if word[0].isupper():
            word = word[0].lower() + word[1:]
        words.append(word)
    return " ".join(words)


def contains_capital(text: str) -> bool:
    """Check if text has any uppercase character."""
    return any(char.isupper() for char in text)


def is_lowercase(text: str) -> bool:
    """Check that no letter in text is uppercase.

    Caseless characters (digits, CJK ideographs, punctuation) are ignored.
    """
    return not contains_capital(text)


def filter_text(text: str, filter_rule: FilterRule) -> str:
    """Apply the casing transform of filter_rule to text."""
    if filter_rule is FilterRule.FIRST_LETTER_LOWER:
        return first_letter_to_lower(text)
    if filter_rule in (FilterRule.ALL_LOWER, FilterRule.CAPITAL_SPLIT):
        return text.lower()
    return text


def normalization_key(
    text: str,
    code: str,
    filter_rule: FilterRule = FilterRule.NONE,
    cutoff_rule: CutoffRule = CutoffRule.NONE,
) -> str:
    """Compute the canonical key of a (text, code) pair.

    The filter only touches text; code is always lowercased. Never fails:
    empty inputs give an empty key.

    Args:
        text: Display text column.
        code: Encoding column.
        filter_rule: Casing transform for text.
        cutoff_rule: Separators removed from the joined key.

    Returns:
        Normalization key.
    """
    return apply_cutoff(filter_text(text, filter_rule) + code.lower(), cutoff_rule)
