"""Main CLI application."""

import typer
from rich.console import Console

from platecheck import __version__
from platecheck.logging import setup_logging

app = typer.Typer(
    name="platecheck",
    help="Look up UK and Isle of Man vehicle registrations from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
    ),
) -> None:
    """platecheck - vehicle tax, MOT and spec lookup."""
    if version:
        console.print(f"platecheck v{__version__}")
        raise typer.Exit()
    setup_logging()


@app.command()
def lookup(
    plate: str = typer.Argument(..., help="Registration number, e.g. 'AB12 CDE' or 'PMN 147 E'"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    no_scrape: bool = typer.Option(False, "--no-scrape", help="Skip third-party spec sites"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show MOT defects and sources"),
) -> None:
    """Look up tax, MOT and vehicle details for a registration."""
    from platecheck.cli.commands.lookup import run_lookup

    run_lookup(plate=plate, as_json=as_json, no_scrape=no_scrape, verbose=verbose)


@app.command()
def insurance(
    plate: str = typer.Argument(..., help="Registration number"),
    headed: bool = typer.Option(False, "--headed", help="Show browser window"),
) -> None:
    """Check whether a vehicle appears on the Motor Insurance Database."""
    from platecheck.cli.commands.insurance import run_insurance

    run_insurance(plate=plate, headed=headed)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current settings"),
    reset: bool = typer.Option(False, "--reset", help="Delete saved settings and secrets"),
) -> None:
    """Set up API credentials and lookup options."""
    from platecheck.cli.commands.config import run_config

    run_config(show=show, reset=reset)


@app.command()
def sources() -> None:
    """List data sources and which ones lookups will use."""
    from platecheck.cli.commands.sources import run_sources

    run_sources()


if __name__ == "__main__":
    app()
