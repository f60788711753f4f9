"""Tests for the builder module."""

import pytest

from rimelex.builder.groups import (
    GroupPolicy,
    filter_groups,
    has_capital_start,
    matches_policy,
)
from rimelex.builder.index import build_key_map, build_key_set, build_text_set
from rimelex.builder.output import format_entry, format_groups, write_lines
from rimelex.builder.partition import CapitalPartition, build_safe_keys, partition_by_capital
from rimelex.builder.weights import WeightStats, add_weight, rewrite_weights
from rimelex.ingest.rime import read_rows
from rimelex.normalizer import CutoffRule, EntryRule, FilterRule
from rimelex.schema import DictionaryRow, PlainKeyEntry, TextCodeEntry


def rows_of(*lines: str) -> list[DictionaryRow]:
    """Helper to parse rows from literal lines."""
    return [DictionaryRow.parse(line) for line in lines]


ALL_LOWER_BOTH = EntryRule(FilterRule.ALL_LOWER, CutoffRule.REMOVE_BOTH)


class TestBuildKeySet:
    """Tests for build_key_set."""

    def test_all_lower_merges_case(self):
        rows = rows_of("Apple\tAPPL", "apple\tappl", "e-mail\temail", "email\temail")
        assert build_key_set(rows, ALL_LOWER_BOTH) == {"appleappl", "emailemail"}

    def test_no_rule_keeps_case(self):
        rows = rows_of("Apple\tAPPL", "apple\tappl")
        assert build_key_set(rows, EntryRule()) == {"Appleappl", "appleappl"}

    def test_lowercase_only_drops_capitalized_rows(self):
        """Any uppercase letter in the raw line drops the row, code included."""
        rows = rows_of("Apple\tappl", "apple\tAPPL", "pear\tpear")
        rule = EntryRule(FilterRule.LOWERCASE_ONLY, CutoffRule.NONE)
        assert build_key_set(rows, rule) == {"pearpear"}

    def test_first_letter_lower(self):
        rows = rows_of("Windows XP\twindows xp")
        rule = EntryRule(FilterRule.FIRST_LETTER_LOWER, CutoffRule.REMOVE_SPACES)
        assert build_key_set(rows, rule) == {"windowsxPwindowsxp"}

    def test_capital_split_set_difference(self):
        """Keys that appear capitalized anywhere are excluded."""
        rows = rows_of("apple\tappl", "Apple\tappl", "pear\tpear", "Paris\tparis")
        rule = EntryRule(FilterRule.CAPITAL_SPLIT, CutoffRule.REMOVE_BOTH)
        assert build_key_set(rows, rule) == {"pearpear"}

    def test_accepts_lazy_rows(self, write_file, sample_dict_content):
        path = write_file("en.dict.yaml", sample_dict_content)
        keys = build_key_set(read_rows(path), ALL_LOWER_BOTH)
        assert keys == {"appleappl", "windowsxpwindowsxp", "emailemail"}


class TestBuildKeyMap:
    """Tests for build_key_map."""

    def test_groups_keep_original_variants(self):
        rows = rows_of("Apple\tAPPL\t100", "apple\tappl", "apple\tappl\t5")
        groups = build_key_map(rows, ALL_LOWER_BOTH)
        assert groups == {
            "appleappl": {TextCodeEntry("Apple", "APPL"), TextCodeEntry("apple", "appl")}
        }

    def test_text_only(self):
        rows = rows_of("Apple\tAPPL", "Apple\tappl")
        groups = build_key_map(rows, ALL_LOWER_BOTH, text_only=True)
        assert groups == {"appleappl": {PlainKeyEntry("Apple")}}

    def test_lowercase_only(self):
        rows = rows_of("Apple\tappl", "apple\tappl")
        groups = build_key_map(rows, EntryRule(FilterRule.LOWERCASE_ONLY))
        assert groups == {"appleappl": {TextCodeEntry("apple", "appl")}}

    def test_capital_split_groups_all_rows(self):
        rows = rows_of("Apple\tappl", "apple\tappl")
        groups = build_key_map(rows, EntryRule(FilterRule.CAPITAL_SPLIT, CutoffRule.REMOVE_BOTH))
        assert len(groups["appleappl"]) == 2

    def test_idempotent(self, write_file, sample_dict_content):
        """Indexing the same file twice gives identical groups."""
        path = write_file("en.dict.yaml", sample_dict_content)
        first = build_key_map(read_rows(path), ALL_LOWER_BOTH)
        second = build_key_map(read_rows(path), ALL_LOWER_BOTH)
        assert first == second
        assert format_groups(first) == format_groups(second)

    def test_end_to_end_apple(self, write_file):
        """Marker, then Apple/apple rows → one ambiguous group."""
        path = write_file("en.dict.yaml", "---\n...\n# +_+\nApple\tAPPL\napple\tappl\n")
        groups = build_key_map(read_rows(path), ALL_LOWER_BOTH)

        assert list(groups) == ["appleappl"]
        assert groups["appleappl"] == {
            TextCodeEntry("Apple", "APPL"),
            TextCodeEntry("apple", "appl"),
        }
        assert "appleappl" in filter_groups(groups, GroupPolicy.AMBIGUOUS)


class TestBuildTextSet:
    """Tests for build_text_set."""

    def test_first_column(self):
        rows = rows_of("中文\tzhong wen\t100", "中文\tzhong wen", "拼音\tpin yin")
        assert build_text_set(rows) == {"中文", "拼音"}


class TestCapitalPartition:
    """Tests for CapitalPartition."""

    def test_partition_disjoint_and_exhaustive(self):
        """Each row lands in exactly one accumulator, by raw-line casing."""
        rows = rows_of("apple\tappl", "Apple\tappl", "pear\tPEAR", "plum\tplum")
        partition = CapitalPartition(CutoffRule.REMOVE_BOTH)
        routed = [partition.add(row) for row in rows]

        assert routed == ["appleappl", "appleappl", "pearpear", "plumplum"]
        assert partition.lower == {"appleappl", "plumplum"}
        assert partition.capital == {"appleappl", "pearpear"}

    def test_safe_keys_exclude_capital(self):
        rows = rows_of("apple\tappl", "Apple\tappl", "plum\tplum")
        partition = partition_by_capital(rows, CutoffRule.REMOVE_BOTH)
        safe = partition.safe_keys()

        assert safe == {"plumplum"}
        assert not safe & partition.capital

    def test_safe_entries(self):
        """Later lowercase rows replace earlier ones with the same key."""
        rows = rows_of("plum\tplum", "plum\tplum\t9", "plum-x\tplum", "apple\tappl", "APPLE\tappl")
        partition = partition_by_capital(rows, CutoffRule.REMOVE_BOTH)
        entries = partition.safe_entries()

        assert set(entries) == {"plumplum", "plumxplum"}
        assert entries["plumxplum"] == TextCodeEntry("plum-x", "plum")

    def test_build_safe_keys(self):
        rows = rows_of("apple\tappl", "Apple\tappl")
        assert build_safe_keys(rows) == set()

    def test_rule(self):
        partition = CapitalPartition(CutoffRule.REMOVE_SPACES)
        assert partition.rule == EntryRule(FilterRule.CAPITAL_SPLIT, CutoffRule.REMOVE_SPACES)


class TestGroupFilter:
    """Tests for filter_groups and policies."""

    @pytest.fixture
    def groups(self):
        return {
            "appleappl": {TextCodeEntry("Apple", "APPL"), TextCodeEntry("apple", "appl")},
            "parisparis": {TextCodeEntry("Paris", "paris")},
            "pearpear": {TextCodeEntry("pear", "pear")},
            "emailemail": {TextCodeEntry("e-mail", "email"), TextCodeEntry("email", "email")},
        }

    def test_ambiguous_excludes_singletons(self, groups):
        kept = filter_groups(groups, GroupPolicy.AMBIGUOUS)
        assert set(kept) == {"appleappl", "emailemail"}

    def test_has_capital_start(self, groups):
        kept = filter_groups(groups, GroupPolicy.HAS_CAPITAL_START)
        assert set(kept) == {"appleappl", "parisparis"}

    def test_review_is_default(self, groups):
        """Combined policy keeps capitalized singletons too."""
        kept = filter_groups(groups)
        assert set(kept) == {"appleappl", "parisparis", "emailemail"}

    def test_no_mutation(self, groups):
        before = {k: set(v) for k, v in groups.items()}
        kept = filter_groups(groups)
        kept["appleappl"].clear()

        assert groups == before

    def test_plain_key_entries(self):
        assert has_capital_start({PlainKeyEntry("Paris")}) is True
        assert has_capital_start({PlainKeyEntry("paris"), PlainKeyEntry("")}) is False

    def test_matches_policy(self):
        single = {TextCodeEntry("pear", "pear")}
        assert matches_policy(single, GroupPolicy.REVIEW) is False

    def test_parse(self):
        assert GroupPolicy.parse("review") == GroupPolicy.AMBIGUOUS | GroupPolicy.HAS_CAPITAL_START
        assert GroupPolicy.parse("capital") is GroupPolicy.HAS_CAPITAL_START
        with pytest.raises(ValueError):
            GroupPolicy.parse("all")


class TestOutput:
    """Tests for output writers."""

    def test_format_entry(self):
        assert format_entry(TextCodeEntry("Apple", "APPL")) == "Apple\tAPPL"
        assert format_entry(PlainKeyEntry("Apple")) == "Apple"

    def test_format_groups_sorted(self):
        groups = {
            "b": {PlainKeyEntry("b")},
            "a": {TextCodeEntry("apple", "a"), TextCodeEntry("Apple", "A")},
        }
        assert format_groups(groups) == ["a\tApple\tA\tapple\ta", "b\tb"]

    def test_write_lines(self, tmp_path):
        path = tmp_path / "out" / "keys.txt"
        assert write_lines(path, ["a", "b"]) == 2
        assert path.read_text(encoding="utf-8") == "a\nb\n"


class TestWeights:
    """Tests for weight rewriting."""

    def test_rewrite_weights(self):
        lines = ["name: ext", "# +_+", "hello\thello", "world\tworld\t5", "", "# note"]
        stats = WeightStats()
        result = rewrite_weights(lines, 100, stats=stats)

        assert result == [
            "name: ext", "# +_+", "hello\thello\t100", "world\tworld\t100", "", "# note",
        ]
        assert stats.replaced == 1
        assert stats.appended == 1
        assert stats.total == 2

    def test_header_untouched_without_marker(self):
        lines = ["hello\thello"]
        assert rewrite_weights(lines, 1) == lines

    def test_add_weight_in_place(self, write_file):
        path = write_file("ext.dict.yaml", "---\n# +_+\n测试\tce shi\n单词\tdan ci\t3\n")
        stats = add_weight(path, 0)

        assert path.read_text(encoding="utf-8") == "---\n# +_+\n测试\tce shi\t0\n单词\tdan ci\t0\n"
        assert (stats.replaced, stats.appended) == (1, 1)

    def test_add_weight_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            add_weight(tmp_path / "missing.dict.yaml", 1)
