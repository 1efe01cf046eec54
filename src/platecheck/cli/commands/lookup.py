"""Lookup command implementation."""

import asyncio
import logging

import typer
from rich.console import Console
from rich.panel import Panel

from platecheck.cli.ui import (
    create_extras_table,
    create_mot_table,
    error_panel,
    vehicle_panel,
    warning_panel,
)
from platecheck.core.aggregator import Aggregator
from platecheck.core.config import ConfigManager
from platecheck.exceptions import ConfigError
from platecheck.models import AggregateResult

logger = logging.getLogger(__name__)
console = Console()


def run_lookup(
    plate: str,
    as_json: bool = False,
    no_scrape: bool = False,
    verbose: bool = False,
) -> None:
    """Run the lookup command."""
    try:
        settings = ConfigManager().load()
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    if no_scrape:
        settings = settings.model_copy(update={"scraping_enabled": False})

    aggregator = Aggregator.from_settings(settings)
    logger.info("Lookup: plate=%s sources=%s", plate, [s.name for s in aggregator.sources])

    if verbose and not as_json:
        names = ", ".join(source.name for source in aggregator.sources)
        console.print(f"[dim]  Sources: {names}[/dim]")

    try:
        if as_json:
            result = asyncio.run(aggregator.get_vehicle_info(plate))
        else:
            with console.status(f"Looking up {plate}..."):
                result = asyncio.run(aggregator.get_vehicle_info(plate))
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        _display_result(result, verbose)

    if result.error:
        raise typer.Exit(1)


def _display_result(result: AggregateResult, verbose: bool = False) -> None:
    """Display a lookup result with Rich formatting."""
    console.print()

    if result.error:
        console.print(error_panel(result.error, result.error_detail if verbose else None))
        return

    if result.is_manx:
        console.print("[dim]  Isle of Man registration[/dim]")

    if result.vehicle:
        console.print(vehicle_panel(result.vehicle))
        if result.vehicle.source == "mock":
            console.print(warning_panel(
                "Showing sample data. Run 'platecheck config' to add DVLA credentials."
            ))
    else:
        console.print(warning_panel("No registry record found for this vehicle."))

    if result.uk_vehicle:
        console.print(vehicle_panel(result.uk_vehicle, title="Previous UK registration"))

    if result.mot_history:
        if result.mot_history.mot_tests:
            console.print(create_mot_table(result.mot_history, show_defects=verbose))
        else:
            console.print("[dim]  No MOT tests recorded.[/dim]")

    if result.extras and not result.extras.is_empty:
        console.print(
            Panel(
                create_extras_table(result.extras),
                title="More details",
                subtitle="[dim]unofficial sources[/dim]",
                border_style="blue",
                padding=(1, 2),
            )
        )
