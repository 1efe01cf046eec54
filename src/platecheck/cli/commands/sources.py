"""Sources command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from platecheck.cli.ui import error_panel
from platecheck.core.aggregator import Aggregator
from platecheck.core.config import ConfigManager
from platecheck.exceptions import ConfigError
from platecheck.sources import get_source, list_sources

console = Console()


def run_sources() -> None:
    """Run the sources command."""
    try:
        settings = ConfigManager().load()
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    active = {source.name for source in Aggregator.from_settings(settings).sources}

    table = Table(title="Data sources", padding=(0, 1))
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Cache", justify="right")
    table.add_column("Used")

    for name in list_sources():
        source_cls = get_source(name)
        used = "[green]yes[/green]" if name in active else "[dim]no[/dim]"
        table.add_row(name, source_cls.label, _format_ttl(source_cls.cache_ttl), used)

    console.print()
    console.print(table)


def _format_ttl(seconds: float) -> str:
    hours = seconds / 3600
    return f"{hours:g}h"
