"""Insurance command implementation."""

import asyncio
import logging

import typer
from rich.console import Console

from platecheck.cli.ui import error_panel, insurance_panel
from platecheck.core.plates import require_valid_plate
from platecheck.exceptions import PlateError
from platecheck.models import InsuranceState
from platecheck.sources.insurance import InsuranceChecker

logger = logging.getLogger(__name__)
console = Console()


def run_insurance(plate: str, headed: bool = False) -> None:
    """Run the insurance command."""
    try:
        parsed = require_valid_plate(plate)
    except PlateError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    checker = InsuranceChecker(headless=not headed)
    logger.info("Insurance check: plate=%s headed=%s", parsed.canonical, headed)

    console.print()
    try:
        with console.status("Checking the Motor Insurance Database..."):
            status = asyncio.run(checker.check(parsed.canonical))
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(1)

    console.print(insurance_panel(parsed.display, status))

    if status.state == InsuranceState.UNKNOWN:
        console.print(
            "[dim]  Make sure Playwright is installed: playwright install chromium[/dim]"
        )
        raise typer.Exit(1)
