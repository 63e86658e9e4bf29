#!/usr/bin/env python3
"""
Command line interface for channel-screen.

Usage:
    channel-screen classify channel.json --taxonomy kids
    channel-screen prefilter channel.json
    channel-screen fetch https://www.youtube.com/@kanal/about --output about.html
    channel-screen config
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.table import Table

from channel_screen.collectors.errors import FetchError
from channel_screen.collectors.fetcher import FetchOptions, ResilientFetcher
from channel_screen.config import config
from channel_screen.features.schema import Verdict
from channel_screen.filters.checks import taxonomy_check
from channel_screen.filters.prefilter import run_prefilter
from channel_screen.filters.wordlists import HARD_PHRASE_TAXONOMIES
from channel_screen.logging_ import setup_logging

console = Console()


def load_document(path: str) -> Any:
    """Read a channel document from a JSON file ('-' for stdin)."""
    if path == "-":
        return json.load(sys.stdin)
    with Path(path).open(encoding="utf-8") as f:
        return json.load(f)


def print_verdict(title: str, verdict: Verdict) -> None:
    status = "[green]PASS[/green]" if verdict.ok else "[red]FAIL[/red]"
    console.print(
        f"{title}: {status} "
        f"(distinct={verdict.distinct_hit_count}, total={verdict.total_hit_count}, "
        f"threshold={verdict.threshold})"
    )

    if not verdict.matches:
        return

    table = Table()
    table.add_column("Match", style="cyan")
    table.add_column("Hits", justify="right", style="yellow")
    table.add_column("Fields")
    table.add_column("Sample", style="dim")

    for record in verdict.matches:
        fields = ", ".join(f"{h.field} ({h.count})" for h in record.per_field)
        sample = next((s for h in record.per_field for s in h.samples), "")
        table.add_row(record.key, str(record.hits_total), fields, sample)

    console.print(table)


def cmd_classify(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    threshold = args.threshold if args.threshold is not None else config.HARD_PHRASE_THRESHOLD
    verdict = taxonomy_check(document, args.taxonomy, threshold)

    if args.json:
        console.print_json(json.dumps(verdict.to_dict(), ensure_ascii=False))
    else:
        print_verdict(f"{args.taxonomy} phrases", verdict)

    return 0 if verdict.ok else 1


def cmd_prefilter(args: argparse.Namespace) -> int:
    document = load_document(args.document)
    result = run_prefilter(document)

    if result.passed:
        console.print("[green]Prefilter passed[/green]")
    else:
        console.print(f"[red]Prefilter failed[/red] ({result.failed_rule}): {result.reason}")

    if args.verbose:
        for name, verdict in (("alphabet", result.alphabet), ("language", result.language)):
            if verdict is not None:
                print_verdict(name, verdict)
        for topic, verdict in result.topics.items():
            print_verdict(f"topic {topic}", verdict)

    return 0 if result.passed else 1


async def _fetch(url: str, options: FetchOptions, deadline: Optional[float]) -> str:
    async with ResilientFetcher(options=options) as fetcher:
        return await fetcher.fetch(url, deadline=deadline)


def cmd_fetch(args: argparse.Namespace) -> int:
    options = FetchOptions()
    if args.retries is not None:
        options.max_retries = args.retries
    if args.timeout is not None:
        options.timeout_ms = args.timeout

    try:
        text = asyncio.run(_fetch(args.url, options, args.deadline))
    except FetchError as e:
        console.print(f"[red]Fetch failed:[/red] {e}")
        return 1
    except ValueError as e:
        console.print(f"[red]Invalid URL:[/red] {e}")
        return 1

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        console.print(f"[green]Saved {len(text):,} chars to {args.output}[/green]")
    else:
        sys.stdout.write(text)

    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config.print_status()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="channel-screen",
        description="Screen YouTube channels with rule-based checks",
    )
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("classify", help="Run a hard phrase taxonomy on a channel document")
    p.add_argument("document", help="Channel JSON file ('-' for stdin)")
    p.add_argument("--taxonomy", choices=sorted(HARD_PHRASE_TAXONOMIES), default="kids")
    p.add_argument("--threshold", type=int, help="Distinct phrases that reject the channel")
    p.add_argument("--json", action="store_true", help="Print the verdict as JSON")
    p.set_defaults(func=cmd_classify)

    p = sub.add_parser("prefilter", help="Run location, alphabet, language and topic rules")
    p.add_argument("document", help="Channel JSON file ('-' for stdin)")
    p.add_argument("-v", "--verbose", action="store_true", help="Show every rule's verdict")
    p.set_defaults(func=cmd_prefilter)

    p = sub.add_parser("fetch", help="Fetch a page through the resilient fetcher")
    p.add_argument("url")
    p.add_argument("--output", help="Write the body to this file instead of stdout")
    p.add_argument("--retries", type=int, help="Override FETCH_MAX_RETRIES")
    p.add_argument("--timeout", type=float, help="Override FETCH_TIMEOUT_MS")
    p.add_argument("--deadline", type=float, help="Overall budget in seconds")
    p.set_defaults(func=cmd_fetch)

    p = sub.add_parser("config", help="Show configuration")
    p.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
