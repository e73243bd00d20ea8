"""
CLI (Command Line Interface).

Extract records from Stud.IP pages that were saved to disk, e.g.:

    studipextract downloads dateien.html --base-url https://studip.uni-passau.de/studip/
    studipextract seminars meine_seminare.html --out seminars.json
    studipextract downloads dateien.html --tree

Note:
- The JSON array (or the tree listing) goes to stdout, everything else to stderr
- The CLI never crashes on bad input: it prints a message and exits with 1
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from studipextract.config import DEFAULT_CONFIG, ExtractorConfig, MissingSegmentPolicy, load_config
from studipextract.errors import ConfigError, RowExtractionError, SkipReason
from studipextract.model import ExtractionResult
from studipextract.parse import parse_file, write_json
from studipextract.selector import DEFAULT_PARSER, PARSERS
from studipextract.serialize import serialize
from studipextract.tree import build_tree

console = Console(stderr=True)


def _error(msg: str) -> None:
    console.print(f"[bold red]Error:[/] {escape(msg)}")


def _load_config(args: argparse.Namespace) -> ExtractorConfig:
    """
    Resolve the effective config from --config and the per-command flags.
    """
    config = load_config(args.config) if args.config else DEFAULT_CONFIG
    if getattr(args, "strict", False):
        config = replace(config, missing_segment=MissingSegmentPolicy.RAISE)
    return config


def _print_report(kind: str, result: ExtractionResult) -> None:
    """
    Show how many candidate rows were found, extracted and skipped.
    """
    table = Table(title=f"{kind}: extraction summary")
    table.add_column("Rows", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("candidates", str(result.candidates))
    table.add_row("extracted", str(len(result.records)))
    for reason in SkipReason:
        table.add_row(f"skipped ({reason.value})", str(result.skip_count(reason)))

    console.print(table)


def _print_tree(result: ExtractionResult) -> None:
    for node in build_tree(result.records):
        marker = "/" if node.entry.is_folder else ""
        print(f"{node.path}{marker}")


def _cmd_extract(args: argparse.Namespace) -> int:
    """
    Run one extractor on one saved page.
    """
    kind = args.command

    try:
        config = _load_config(args)
    except ConfigError as exc:
        _error(str(exc))
        return 1
    except OSError as exc:
        _error(f"Cannot read config {args.config}: {exc}")
        return 1

    try:
        result = parse_file(args.file, kind, base_url=args.base_url, config=config, parser=args.parser)
    except OSError as exc:
        _error(f"Cannot read {args.file}: {exc}")
        return 1
    except RowExtractionError as exc:
        _error(str(exc))
        return 1

    if result.candidates == 0:
        console.print(f"[yellow]No {kind} rows found in {escape(str(args.file))} (unexpected page layout?)[/]")

    if getattr(args, "tree", False):
        _print_tree(result)
    elif args.out:
        n = write_json(result, args.out)
        console.print(f"Wrote {n} {kind} to: {escape(str(args.out))}")
    else:
        print(serialize(result.records))

    if args.report:
        _print_report(kind, result)

    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="studipextract", description="Extract records from saved Stud.IP pages")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", type=Path, help="Saved HTML page")
    common.add_argument("--base-url", type=str, default=None, help="Page URL, used to make links absolute")
    common.add_argument("--config", type=Path, default=None, help="JSON file overriding selectors/constants")
    common.add_argument("--out", "-o", type=Path, default=None, help="Write JSON array to this file")
    common.add_argument("--parser", choices=PARSERS, default=DEFAULT_PARSER, help="HTML tree builder")
    common.add_argument("--report", action="store_true", help="Print candidate/skip counts to stderr")

    p_downloads = sub.add_parser("downloads", parents=[common], help="Extract the file tree of a downloads page")
    p_downloads.add_argument("--tree", action="store_true", help="Print entry paths instead of JSON")

    p_seminars = sub.add_parser("seminars", parents=[common], help="Extract the seminar list")
    p_seminars.add_argument(
        "--strict",
        action="store_true",
        help="Fail on seminar rows without name/description instead of skipping them",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to the extractor
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "tree", False) and args.out:
        parser.error("--tree cannot be combined with --out")

    if args.command in ("downloads", "seminars"):
        raise SystemExit(_cmd_extract(args))

    raise SystemExit(2)
