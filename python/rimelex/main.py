"""rimelex CLI - Rime dictionary maintenance toolkit.

Usage:
    python -m rimelex.main keys en_dicts/en.dict.yaml --filter all_lower --cutoff remove_both
    python -m rimelex.main groups en_dicts/AHD5_mix_split.yaml --filter capital_split -o review.txt
    python -m rimelex.main safe en_dicts/AHD5_mix_split.yaml --cutoff remove_both
    python -m rimelex.main acronym others/en_acronym.txt -o en_dicts/en_acronym.txt
    python -m rimelex.main weight cn_dicts/ext.dict.yaml 100
    python -m rimelex.main extract out.json words.txt
    python -m rimelex.main tables --rime-dir ~/rime-ice
"""

import argparse
import sys
import time
from pathlib import Path

from .builder.acronym import AcronymExpander
from .builder.groups import GroupPolicy, filter_groups
from .builder.index import build_key_map, build_key_set
from .builder.output import format_groups, write_lines
from .builder.partition import partition_by_capital
from .builder.tables import load_tables
from .builder.weights import add_weight
from .ingest.json_words import extract_words
from .ingest.plain_text import read_lines
from .ingest.rime import RimeDictSource
from .normalizer import CutoffRule, EntryRule, FilterRule
from . import config as cfg

FILTER_CHOICES = [r.value for r in FilterRule]
CUTOFF_CHOICES = [r.value for r in CutoffRule]


def print_time_cost(label: str, start: float) -> None:
    """Print seconds elapsed since start."""
    print(f"  {label}:\t{time.perf_counter() - start:.2f}s")


def print_errors(errors: list[str], prefix: str = "SKIP") -> None:
    for error in errors:
        print(f"  {prefix} - {error}")


def _source(args: argparse.Namespace) -> RimeDictSource:
    return RimeDictSource(
        marker=args.marker,
        comment_char=cfg.default_comment_char(),
        strict=args.strict,
    )


def _rule(args: argparse.Namespace) -> EntryRule:
    return EntryRule(FilterRule.parse(args.filter), CutoffRule.parse(args.cutoff))


def _resolve(args: argparse.Namespace, path: Path) -> Path:
    """Resolve a relative file path against --rime-dir."""
    path = Path(path)
    return path if path.is_absolute() else Path(args.rime_dir) / path


def cmd_keys(args: argparse.Namespace) -> int:
    """Build the key set of one dictionary."""
    start = time.perf_counter()
    source = _source(args)
    keys = build_key_set(source.rows(_resolve(args, args.dictionary)), _rule(args))
    print_errors(source.stats.errors)

    print(f"  Keys: {len(keys):,}")
    if args.output:
        write_lines(args.output, sorted(keys))
        print(f"  Written: {args.output}")
    print_time_cost("Indexed", start)
    return 0


def cmd_groups(args: argparse.Namespace) -> int:
    """Write the groups of one dictionary that need review."""
    start = time.perf_counter()
    source = _source(args)
    groups = build_key_map(source.rows(_resolve(args, args.dictionary)), _rule(args))
    print_errors(source.stats.errors)

    kept = filter_groups(groups, GroupPolicy.parse(args.policy))
    print(f"  Groups: {len(groups):,}")
    print(f"  Kept ({args.policy}): {len(kept):,}")

    lines = format_groups(kept)
    if args.output:
        write_lines(args.output, lines)
        print(f"  Written: {args.output}")
    else:
        for line in lines:
            print(line)
    print_time_cost("Grouped", start)
    return 0


def cmd_safe(args: argparse.Namespace) -> int:
    """Write keys that never appear capitalized."""
    start = time.perf_counter()
    source = _source(args)
    partition = partition_by_capital(
        source.rows(_resolve(args, args.dictionary)), CutoffRule.parse(args.cutoff)
    )
    print_errors(source.stats.errors)

    safe = partition.safe_keys()
    print(f"  Lowercase keys: {len(partition.lower):,}")
    print(f"  Capitalized keys: {len(partition.capital):,}")
    print(f"  Safe keys: {len(safe):,}")
    if args.output:
        write_lines(args.output, sorted(safe))
        print(f"  Written: {args.output}")
    print_time_cost("Partitioned", start)
    return 0


def cmd_acronym(args: argparse.Namespace) -> int:
    """Expand an acronym definition file into dictionary rows."""
    start = time.perf_counter()
    path = _resolve(args, args.source or cfg.default_acronym_path())

    expander = AcronymExpander(comment_char=cfg.default_comment_char())
    rows = list(expander.expand(read_lines(path, cfg.default_comment_char())))
    for error in expander.errors:
        prefix = "DUPLICATE" if error.startswith("duplicate") else "SKIP"
        print(f"  {prefix} - {error}")

    print(f"  Rows: {len(rows):,} ({expander.duplicates} duplicates)")
    if args.output:
        write_lines(args.output, rows)
        print(f"  Written: {args.output}")
    else:
        for row in rows:
            print(row)
    print_time_cost("Expanded", start)
    return 0


def cmd_weight(args: argparse.Namespace) -> int:
    """Set the weight of every row of a dictionary in place."""
    start = time.perf_counter()
    path = _resolve(args, args.dictionary)
    stats = add_weight(
        path,
        args.weight,
        marker=args.marker,
        comment_char=cfg.default_comment_char(),
    )
    print(f"  Replaced: {stats.replaced:,}")
    print(f"  Appended: {stats.appended:,}")
    print_time_cost(f"Weighted {path.name}", start)
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    """Extract headwords from a JSON-lines export."""
    start = time.perf_counter()
    count = write_lines(args.output, extract_words(args.input))
    print(f"  Words: {count:,}")
    print(f"  Written: {args.output}")
    print_time_cost("Extracted", start)
    return 0


def cmd_tables(args: argparse.Namespace) -> int:
    """Load every configured dictionary and report sizes."""
    start = time.perf_counter()
    tables = load_tables(
        args.rime_dir,
        cfg.get_dictionaries(),
        marker=args.marker,
        strict=args.strict,
    )
    print_errors(tables.errors())

    for name in tables.names():
        line = f"    {name}: {tables.size(name):,}"
        if name in tables.review_groups:
            line += f" ({len(tables.review_groups[name]):,} to review)"
        if name in tables.safe_entries:
            line += f" ({len(tables.safe_entries[name]):,} safe)"
        print(line)
    print_time_cost("Loaded", start)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser, with defaults from config.json."""
    parser = argparse.ArgumentParser(
        description="rimelex - Rime dictionary maintenance toolkit"
    )
    parser.add_argument(
        "--rime-dir",
        "-r",
        type=Path,
        default=Path(cfg.default_rime_dir()),
        help=f"Rime configuration directory (default: {cfg.default_rime_dir()})",
    )
    parser.add_argument(
        "--marker",
        type=str,
        default=cfg.default_marker(),
        help=f"Line after which data rows start (default: {cfg.default_marker()!r})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=cfg.default_strict(),
        help="Fail on malformed rows instead of skipping them",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_rule_args(p: argparse.ArgumentParser, with_filter: bool = True) -> None:
        p.add_argument(
            "dictionary",
            type=Path,
            help="Rime dictionary file, relative to --rime-dir",
        )
        if with_filter:
            p.add_argument(
                "--filter",
                choices=FILTER_CHOICES,
                default=FilterRule.ALL_LOWER.value,
                help="Text casing rule (default: all_lower)",
            )
        p.add_argument(
            "--cutoff",
            choices=CUTOFF_CHOICES,
            default=CutoffRule.REMOVE_BOTH.value,
            help="Separator removal rule (default: remove_both)",
        )
        p.add_argument("--output", "-o", type=Path, help="Output file")

    p = sub.add_parser("keys", help="Build normalization key set")
    add_rule_args(p)
    p.set_defaults(func=cmd_keys)

    p = sub.add_parser("groups", help="List key groups needing review")
    add_rule_args(p)
    p.add_argument(
        "--policy",
        choices=["ambiguous", "capital", "review"],
        default=cfg.default_policy(),
        help=f"Group retention policy (default: {cfg.default_policy()})",
    )
    p.set_defaults(func=cmd_groups)

    p = sub.add_parser("safe", help="List keys never seen capitalized")
    add_rule_args(p, with_filter=False)
    p.set_defaults(func=cmd_safe)

    p = sub.add_parser("acronym", help="Expand acronym definitions")
    p.add_argument(
        "source",
        type=Path,
        nargs="?",
        help="Acronym definition file, relative to --rime-dir",
    )
    p.add_argument("--output", "-o", type=Path, help="Output file")
    p.set_defaults(func=cmd_acronym)

    p = sub.add_parser("weight", help="Set the weight of every row in place")
    p.add_argument(
        "dictionary",
        type=Path,
        help="Rime dictionary file, relative to --rime-dir",
    )
    p.add_argument("weight", type=int, help="Weight to set")
    p.set_defaults(func=cmd_weight)

    p = sub.add_parser("extract", help="Extract headwords from JSON lines")
    p.add_argument("input", type=Path, help="JSON-lines export")
    p.add_argument("output", type=Path, help="Word list to write")
    p.set_defaults(func=cmd_extract)

    p = sub.add_parser("tables", help="Load all configured dictionaries")
    p.set_defaults(func=cmd_tables)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    print("=" * 60)
    print(f"rimelex {args.command}")
    print("=" * 60)

    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"  ERROR - {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
