"""Config command implementation."""

import typer
from pydantic import SecretStr, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from platecheck.cli.ui import error_panel, masked_value, success_panel
from platecheck.core.config import ConfigManager
from platecheck.core.keychain import CredentialKeychain
from platecheck.exceptions import ConfigError
from platecheck.models import Settings

console = Console()


def run_config(show: bool = False, reset: bool = False) -> None:
    """Run the config command."""
    if reset:
        _handle_reset()
        return

    manager = ConfigManager()
    try:
        current = manager.load()
    except ConfigError as e:
        console.print(error_panel(e.message, e.details))
        raise typer.Exit(1)

    if show:
        _handle_show(manager, current)
        return

    console.print()
    console.print(
        Panel.fit(
            "[bold]platecheck setup[/bold]\n\n"
            "Leave a credential blank to keep the current value.\n"
            "Without credentials, lookups use sample data.",
            border_style="blue",
        )
    )
    console.print()

    try:
        updates = _collect_settings(current)
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Setup cancelled.[/yellow]")
        raise typer.Exit(1)

    try:
        settings = Settings.model_validate({**current.model_dump(), **updates})
    except ValidationError as e:
        for error in e.errors():
            console.print(f"  [red]Invalid {error['loc'][-1]}: {error['msg']}[/red]")
        raise typer.Exit(1)

    manager.save(settings)

    console.print()
    console.print(success_panel(f"Settings saved to {manager.config_path}"))
    console.print("[dim]Secrets are stored in your OS keychain.[/dim]")


def _collect_settings(current: Settings) -> dict:
    """Prompt for each setting, keeping current values on blank input."""
    updates: dict = {}

    console.print("[bold cyan]--- DVLA Vehicle Enquiry Service ---[/bold cyan]")
    dvla_key = Prompt.ask("  API key", password=True, default="", show_default=False)
    if dvla_key.strip():
        updates["dvla_api_key"] = SecretStr(dvla_key.strip())
    console.print()

    console.print("[bold cyan]--- DVSA MOT History API ---[/bold cyan]")
    client_id = Prompt.ask("  Client ID", default=current.mot_client_id or "")
    client_secret = Prompt.ask("  Client secret", password=True, default="", show_default=False)
    api_key = Prompt.ask("  API key", password=True, default="", show_default=False)
    tenant_id = Prompt.ask("  Tenant ID", default=current.mot_tenant_id or "")
    if client_id.strip():
        updates["mot_client_id"] = client_id.strip()
    if tenant_id.strip():
        updates["mot_tenant_id"] = tenant_id.strip()
    if client_secret.strip():
        updates["mot_client_secret"] = SecretStr(client_secret.strip())
    if api_key.strip():
        updates["mot_api_key"] = SecretStr(api_key.strip())
    console.print()

    console.print("[bold cyan]--- Options ---[/bold cyan]")
    updates["scraping_enabled"] = Confirm.ask(
        "  Include third-party spec sites?", default=current.scraping_enabled
    )
    updates["insurance_enabled"] = Confirm.ask(
        "  Enable insurance checks (needs Playwright)?", default=current.insurance_enabled
    )

    return updates


def _handle_show(manager: ConfigManager, settings: Settings) -> None:
    """Display current settings with secrets masked."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    def secret(value) -> str:
        if value is None:
            return "[yellow]Not set[/yellow]"
        return masked_value(value.get_secret_value())

    table.add_row("Config file", str(manager.config_path) if manager.exists else "[dim]none[/dim]")
    table.add_row("DVLA API key", secret(settings.dvla_api_key))
    table.add_row("MOT client ID", settings.mot_client_id or "[yellow]Not set[/yellow]")
    table.add_row("MOT client secret", secret(settings.mot_client_secret))
    table.add_row("MOT API key", secret(settings.mot_api_key))
    table.add_row("MOT tenant ID", settings.mot_tenant_id or "[yellow]Not set[/yellow]")
    table.add_row("Scraping", "on" if settings.scraping_enabled else "off")
    table.add_row("Insurance checks", "on" if settings.insurance_enabled else "off")
    table.add_row("HTTP timeout", f"{settings.http_timeout:g}s")
    table.add_row("Scrape interval", f"{settings.scrape_interval:g}s")

    console.print()
    console.print(Panel(table, title="Settings", border_style="blue", padding=(1, 2)))
    if not settings.dvla_configured:
        console.print("[dim]  DVLA not configured: vehicle lookups use sample data.[/dim]")
    if not settings.mot_configured:
        console.print("[dim]  MOT API not configured: MOT history uses sample data.[/dim]")


def _handle_reset() -> None:
    """Handle settings reset."""
    console.print()
    if Confirm.ask("[yellow]Delete saved settings and secrets?[/yellow]", default=False):
        deleted_config = ConfigManager().delete()
        CredentialKeychain.delete()

        if deleted_config:
            console.print(success_panel("Settings and secrets deleted."))
        else:
            console.print("[dim]No settings file found; keychain entries cleared.[/dim]")
    else:
        console.print("[dim]Cancelled.[/dim]")
