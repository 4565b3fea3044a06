#!/usr/bin/env python3
"""
CLI for batch content risk assessment.

Usage:
    # Assess a JSON array of items
    python -m core.content_risk.cli posts.json

    # Tune batching and save the full summary
    python -m core.content_risk.cli posts.json --concurrency 3 --batch-size 10 \
        --max-retries 2 --output summary.json

Input format:
    [
      {"text": "...", "platform": "instagram", "contentType": "post"},
      {"content": "...", "platform": "twitter", "contentType": "tweet"}
    ]
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path

from pydantic import TypeAdapter

from core.config import configure_logging
from core.logging import end_run, start_run
from core.utils.cleanup import cleanup_all

from .config import get_content_risk_config
from .errors import BatchError
from .service import ContentRiskService
from .types import AggregateSummary, ContentItem


_items_adapter = TypeAdapter(list[ContentItem])


def load_items(path: Path) -> list[ContentItem]:
    """Read and validate a JSON array of content items.

    Raises:
        OSError: File unreadable
        ValueError: Not JSON or not a list of valid items
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    return _items_adapter.validate_python(raw)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Assess social media content for F-1 visa compliance risk",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("items", type=Path, help="JSON file with an array of content items")
    parser.add_argument("--concurrency", type=int, help="Max oracle calls in flight")
    parser.add_argument("--batch-size", type=int, help="Items per chunk")
    parser.add_argument("--max-retries", type=int, help="Retries for unavailable/timeout items")
    parser.add_argument("--output", "-o", type=Path, help="Write the full summary JSON here")
    return parser


def format_summary(summary: AggregateSummary) -> str:
    lines = [
        f"Items:            {summary.total_items}",
        f"Analyzed:         {summary.succeeded_count}",
        f"Fallbacks:        {summary.failed_count}",
        f"Average score:    {summary.average_risk_score:.1f}",
        f"Overall risk:     {summary.overall_risk_level.value.upper()}",
        "",
    ]
    for index, result in enumerate(summary.per_item, start=1):
        a = result.assessment
        flag = "" if result.succeeded else f"  [fallback: {result.error_detail}]"
        lines.append(
            f"{index:>3}. {a.risk_level.value:<8} {a.risk_score:>3}  "
            f"{result.item.platform.value:<9} {result.item.preview(60)}{flag}"
        )
    return "\n".join(lines)


def _progress(completed: int, total: int) -> None:
    print(f"\r  classified {completed}/{total}", end="", file=sys.stderr, flush=True)


async def run(args: argparse.Namespace) -> int:
    try:
        items = load_items(args.items)
    except (OSError, ValueError) as e:
        print(f"Could not read items from {args.items}: {e}", file=sys.stderr)
        return 2

    config = get_content_risk_config()
    overrides = {
        name: value
        for name, value in (
            ("batch_size", args.batch_size),
            ("max_retries", args.max_retries),
        )
        if value is not None
    }
    if overrides:
        config = replace(config, **overrides)

    async with ContentRiskService(config=config) as service:
        try:
            summary = await service.assess(
                items, concurrency=args.concurrency, progress_callback=_progress
            )
        except BatchError as e:
            print(f"\nBatch rejected: {e}", file=sys.stderr)
            return 2

    print(file=sys.stderr)
    print(format_summary(summary))

    if args.output:
        args.output.write_text(
            summary.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
        )
        print(f"\nSummary written to {args.output}")

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("cli")
    start_run("cli")
    try:
        return asyncio.run(_run_and_cleanup(args))
    finally:
        end_run()


async def _run_and_cleanup(args: argparse.Namespace) -> int:
    try:
        return await run(args)
    finally:
        await cleanup_all()


if __name__ == "__main__":
    sys.exit(main())
