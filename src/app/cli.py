# src/app/cli.py
"""
Command-line entrypoint.

    python -m app.cli --config config/extractor.yaml
    python -m app.cli --mods-dir ~/factorio/mods --format json --limit 20
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from env.loader import DEFAULT_CONFIG, load_config
from mods.resolver import DependencyError
from scripting.base import ContextFactory

from .logging_config import configure_logging
from .pipeline import ExtractionResult, format_recipe_line, run_extraction

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2


def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extract-recipes",
        description="Load mods in dependency order and list every recipe they define.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Path to extractor.yaml (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument("--mods-dir", type=Path, help="Override mods_dir from the config")
    parser.add_argument("--language", help="Override the locale language (e.g. en, de)")
    parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format",
    )
    parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=None,
        help="Only print the first N recipes (by name)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_table(result: ExtractionResult, console: Console, limit: Optional[int] = None) -> None:
    console.print(
        "[bold]Load order:[/bold] " + ", ".join(m.name for m in result.load_order)
    )

    table = Table(title="Recipes", show_lines=False)
    table.add_column("Recipe", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Ingredients -> Results")

    recipes = result.recipes.recipes
    if limit is not None:
        recipes = recipes[:limit]
    for recipe in recipes:
        table.add_row(
            recipe.name,
            result.locale.display("recipe", recipe.name),
            format_recipe_line(result, recipe),
        )
    console.print(table)

    console.print(
        f"found {len(result.recipes)} recipes in {result.elapsed:.2f}s"
    )
    counts = result.report.reason_counts()
    if counts:
        console.print("[yellow]Skipped:[/yellow]")
        for reason, count in counts.items():
            console.print(f"  {reason}: {count}")
        for record in result.report.skipped:
            console.print(f"  - {record}", markup=False)


def render_json(result: ExtractionResult, limit: Optional[int] = None) -> str:
    return json.dumps(result.to_dict(limit=limit), indent=2, sort_keys=True)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(
    argv: Optional[List[str]] = None,
    context_factory: Optional[ContextFactory] = None,
    console: Optional[Console] = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(
        logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr if args.format == "json" else sys.stdout,
    )
    console = console or Console()

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    if args.mods_dir is not None:
        config = replace(config, mods_dir=args.mods_dir.expanduser().resolve())
    if args.language:
        config = replace(config, language=args.language)

    try:
        result = run_extraction(config, context_factory=context_factory)
    except DependencyError as exc:
        logger.error("Cannot determine load order: %s", exc)
        return EXIT_DEPENDENCY_ERROR
    except ValueError as exc:
        logger.error("Invalid mod set: %s", exc)
        return EXIT_CONFIG_ERROR

    if args.format == "json":
        console.print(render_json(result, args.limit), markup=False, highlight=False, soft_wrap=True)
    else:
        render_table(result, console, args.limit)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
