"""rimelex - Rime dictionary maintenance toolkit.

Tools for checking and extending the tab-delimited dictionaries of the Rime
input method engine.

Core concepts:
    - Rows that differ only in case, spacing or hyphens share one key
    - Keys group the original variants, so conflicts can be reviewed
    - Acronym definitions expand into ready-to-use dictionary rows

Example:
    "Apple\\tAPPL" + "apple\\tappl" under all_lower/remove_both → "appleappl"
    Group: {("Apple", "APPL"), ("apple", "appl")} → ambiguous

Usage:
    from rimelex.ingest import rime
    from rimelex.normalizer import EntryRule, FilterRule, CutoffRule
    from rimelex.builder import build_key_map, filter_groups, GroupPolicy

    rule = EntryRule(FilterRule.ALL_LOWER, CutoffRule.REMOVE_BOTH)
    groups = build_key_map(rime.read_rows("en_dicts/en.dict.yaml"), rule)
    review = filter_groups(groups, GroupPolicy.REVIEW)

    from rimelex.builder import AcronymExpander
    expander = AcronymExpander()
    rows = list(expander.expand(["NASA\\tNational Aeronautics and Space Administration"]))
"""

__version__ = "0.1.0"
