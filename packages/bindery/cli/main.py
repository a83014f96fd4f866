"""Command-line interface for Bindery."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from bindery.core.caching import Cache, FSCache, MemoryCache, NullCache
from bindery.core.confidence import ConfidenceScorer
from bindery.core.config.loader import load_app_config, load_config
from bindery.core.config.models import AppConfig
from bindery.core.matching.llm import LLMMatchService
from bindery.core.matching.protocols import MatchService
from bindery.core.models.inventory import DesignInventory
from bindery.core.models.node import TargetNode
from bindery.core.primitives.document import DocumentSnapshot
from bindery.core.providers.openai import OpenAIProvider
from bindery.core.resolution import Preset, ResolutionEngine
from bindery.core.utils.logging import configure_logging
from bindery.core.validation import validate_tree

console = Console()
logger = logging.getLogger(__name__)


async def build_cache(app_config: AppConfig) -> Cache:
    """Cache backend selected by the app config."""
    settings = app_config.cache
    if settings.backend == "fs":
        cache = FSCache(Path(settings.root), ttl_seconds=settings.ttl_seconds)
        await cache.initialize()
        return cache
    if settings.backend == "none":
        return NullCache()
    return MemoryCache(ttl_seconds=settings.ttl_seconds)


def build_match_service(app_config: AppConfig, cache: Cache) -> MatchService | None:
    """LLM-backed match service, or None when disabled or unconfigured."""
    llm = app_config.llm
    if not llm.enabled:
        return None
    if not llm.api_key:
        console.print("[yellow]LLM matching enabled but OPENAI_API_KEY is not set; skipping[/yellow]")
        return None
    provider = OpenAIProvider(
        api_key=llm.api_key,
        base_url=llm.base_url,
        timeout=llm.timeout_seconds,
        llm_cache=cache,
    )
    return LLMMatchService(provider, model=llm.model, temperature=llm.temperature)


def _outcomes_table(outcomes: list) -> Table:
    table = Table(title="Resolution outcomes")
    table.add_column("Node")
    table.add_column("Tier", justify="right")
    table.add_column("Method")
    table.add_column("Confidence", justify="right")
    table.add_column("Result")
    table.add_column("Warnings", justify="right")
    for outcome in outcomes:
        instructions = outcome.instructions
        result = (
            instructions.component_name if instructions.kind == "component" else "container"
        )
        table.add_row(
            outcome.node_id,
            str(int(outcome.tier)),
            outcome.method.value,
            f"{outcome.confidence:.2f}",
            result,
            str(len(outcome.warnings)),
        )
    return table


async def resolve_async(args: argparse.Namespace, app_config: AppConfig) -> int:
    tree = TargetNode.model_validate(load_config(args.tree))
    inventory = DesignInventory.model_validate(load_config(args.inventory))
    document = DocumentSnapshot.model_validate(load_config(args.document)) if args.document else None
    preset = Preset.model_validate(load_config(args.preset)) if args.preset else None

    cache = await build_cache(app_config)
    engine = ResolutionEngine(
        inventory,
        match_service=build_match_service(app_config, cache),
        cache=cache,
        document=document,
        preset=preset,
        settings=app_config.resolution,
    )
    outcomes = await engine.resolve_tree(tree)
    summary = engine.summary()

    if args.json:
        payload = {
            "outcomes": [o.model_dump(mode="json") for o in outcomes],
            "summary": summary.model_dump(mode="json"),
        }
        print(json.dumps(payload, indent=2))
        return 0

    console.print(_outcomes_table(outcomes))
    console.print(f"\n[bold]Quality:[/bold] {summary.quality.value}")
    console.print(engine.tracker.report())
    for group in summary.warnings:
        console.print(f"\n[bold]{group.category.value}[/bold] ({group.count})")
        for example in group.examples:
            console.print(f"   - {example}")
    if summary.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for recommendation in summary.recommendations:
            console.print(f"   - {recommendation}")
    return 0


def run_resolve(args: argparse.Namespace) -> int:
    """Resolve a target tree against an inventory."""
    app_config = load_app_config(args.config)
    configure_logging(
        level=app_config.logging.level,
        format_string=app_config.logging.format,
        filename=app_config.logging.filename,
        structured=app_config.logging.structured,
    )
    try:
        return asyncio.run(resolve_async(args, app_config))
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1


def run_score(args: argparse.Namespace) -> int:
    """Grade a generated tree against the request that produced it."""
    configure_logging(level="WARNING")
    try:
        tree = TargetNode.model_validate(load_config(args.tree))
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    report = validate_tree(tree)
    breakdown = ConfidenceScorer().score(
        args.request, tree, report, self_assessment=args.self_assessment
    )

    if args.json:
        payload = {
            "validation": report.model_dump(mode="json") | {"valid": report.valid},
            "confidence": breakdown.model_dump(mode="json"),
        }
        print(json.dumps(payload, indent=2))
        return 0

    console.print(report.get_summary())
    console.print()
    for line in breakdown.trace:
        console.print(line)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="bindery",
        description="Bindery - resolve UI node trees against a design system",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    resolve = sub.add_parser("resolve", help="Resolve a target tree into build instructions")
    resolve.add_argument("--tree", required=True, help="Path to target tree (JSON/YAML)")
    resolve.add_argument("--inventory", required=True, help="Path to design inventory (JSON/YAML)")
    resolve.add_argument("--document", help="Path to document snapshot for primitive fallback")
    resolve.add_argument("--preset", help="Path to style preset (JSON/YAML)")
    resolve.add_argument(
        "--config",
        default=None,
        help="Path to app config (default: bindery.yaml if present)",
    )
    resolve.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    score = sub.add_parser("score", help="Grade a generated tree against its request")
    score.add_argument("--request", required=True, help="Original free-text request")
    score.add_argument("--tree", required=True, help="Path to generated tree (JSON/YAML)")
    score.add_argument(
        "--self-assessment",
        type=float,
        default=None,
        help="Generator's own confidence in [0, 1]; can only lower the score",
    )
    score.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "resolve":
        sys.exit(run_resolve(args))
    elif args.cmd == "score":
        sys.exit(run_score(args))


if __name__ == "__main__":
    main()
