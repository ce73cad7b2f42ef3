# src/cli/runner.py

"""Headless batch runner: files in, results file out."""

import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.models.errors import ConfigurationError, InvalidRecordError
from src.services.reconciliation_pipeline import (
    ReconciliationPipeline,
    ReconciliationResult,
)
from src.storage.file_manager import FileManager

logger = logging.getLogger("listing_matcher.cli")

# Stderr console for status messages so stdout stays clean
_err = Console(stderr=True)


def _print_table(outcome: ReconciliationResult) -> None:
    """Render a Rich table of matched products, most listings first."""
    table = Table(
        title="Matched Products",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=5)
    table.add_column("Product", max_width=60)
    table.add_column("Listings", justify="right", style="green")

    ranked = sorted(
        (r for r in outcome.results if r.listings),
        key=lambda r: (-len(r.listings), r.product_name),
    )
    for idx, result in enumerate(ranked, 1):
        table.add_row(str(idx), result.product_name, str(len(result.listings)))

    Console().print(table)


def _print_summary(outcome: ReconciliationResult) -> None:
    matched_products = sum(1 for r in outcome.results if r.listings)
    parts: list[str] = [f"{outcome.basic_match_count} basic"]
    if outcome.outlier_count:
        parts.append(f"{outcome.outlier_count} outliers dropped")
    if outcome.secondary_match_count:
        parts.append(f"{outcome.secondary_match_count} recovered")
    _err.print(
        f"[green]✓ {outcome.matched_listing_count} of "
        f"{outcome.listing_count} listings matched to "
        f"{matched_products} of {outcome.product_count} products"
        f" ({', '.join(parts)})[/green]"
    )


def run_reconciliation(
    products_path: Path,
    listings_path: Path,
    output_path: Path | None = None,
    output_format: str = "jsonl",
) -> int:
    """Reconcile two JSON-lines files; return an exit code.

    0 on success, 1 on invalid input or configuration, 2 when an input
    file does not exist.
    """
    for path in (products_path, listings_path):
        if not path.is_file():
            _err.print(f"[red]Input file not found: {path}[/red]")
            logger.error("Input file not found: %s", path)
            return 2

    file_manager = FileManager()
    _err.print(
        f"[bold]Reconciling:[/bold] {products_path.name} against "
        f"{listings_path.name}"
    )

    try:
        products = file_manager.read_records(products_path)
        listings = file_manager.read_records(listings_path)
        outcome = ReconciliationPipeline().run(products, listings)
    except (InvalidRecordError, ConfigurationError) as exc:
        logger.error("Reconciliation aborted: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1

    written = file_manager.write_results(outcome.results, output_path)
    _print_summary(outcome)
    _err.print(f"[dim]Saved results → {written}[/dim]")

    if output_format == "table":
        _print_table(outcome)

    return 0
