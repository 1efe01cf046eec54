"""Rich console UI helpers."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from platecheck.models import (
    DefectType,
    ExtrasRecord,
    InsuranceState,
    InsuranceStatus,
    MotHistory,
    MotStatus,
    TaxStatus,
    VehicleRecord,
)

console = Console()

TAX_STYLES = {
    TaxStatus.TAXED: "green",
    TaxStatus.SORN: "yellow",
    TaxStatus.UNTAXED: "red",
    TaxStatus.NOT_TAXED_FOR_ROAD_USE: "yellow",
}

MOT_STYLES = {
    MotStatus.VALID: "green",
    MotStatus.NO_DETAILS_HELD: "yellow",
    MotStatus.NOT_VALID: "red",
}

DEFECT_STYLES = {
    DefectType.DANGEROUS: "bold red",
    DefectType.MAJOR: "red",
    DefectType.FAIL: "red",
    DefectType.MINOR: "yellow",
    DefectType.PRS: "yellow",
    DefectType.ADVISORY: "dim",
}


def success_panel(message: str) -> Panel:
    """Create a success message panel."""
    return Panel(
        f"[green]\u2713[/green] {message}",
        border_style="green",
        padding=(0, 1),
    )


def error_panel(message: str, details: str | None = None) -> Panel:
    """Create an error message panel."""
    content = f"[red]\u2717[/red] {message}"
    if details:
        content += f"\n\n[dim]{details}[/dim]"
    return Panel(
        content,
        title="Error",
        border_style="red",
        padding=(0, 1),
    )


def warning_panel(message: str) -> Panel:
    """Create a warning message panel."""
    return Panel(
        f"[yellow]\u26a0[/yellow] {message}",
        border_style="yellow",
        padding=(0, 1),
    )


def info_panel(message: str, title: str | None = None) -> Panel:
    """Create an info message panel."""
    return Panel(
        message,
        title=title,
        border_style="blue",
        padding=(1, 2),
    )


def masked_value(value: str, visible_chars: int = 4) -> str:
    """Mask a value, showing only last N characters."""
    if len(value) <= visible_chars:
        return "*" * len(value)
    return "*" * (len(value) - visible_chars) + value[-visible_chars:]


def vehicle_panel(vehicle: VehicleRecord, title: str = "Vehicle") -> Panel:
    """Headline facts for one vehicle record."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    tax_style = TAX_STYLES[vehicle.tax_status]
    mot_style = MOT_STYLES[vehicle.mot_status]

    table.add_row("Registration", vehicle.registration_number)
    table.add_row("Vehicle", f"[bold]{vehicle.description}[/bold]")
    table.add_row("Colour", vehicle.colour)
    table.add_row("Fuel", vehicle.fuel_type)
    if vehicle.engine_capacity:
        table.add_row("Engine", f"{vehicle.engine_capacity}cc")
    if vehicle.co2_emissions is not None:
        table.add_row("CO2", f"{vehicle.co2_emissions} g/km")

    tax_line = f"[{tax_style}]{vehicle.tax_status.value}[/{tax_style}]"
    if vehicle.tax_due_date:
        tax_line += f" (due {vehicle.tax_due_date.strftime('%d %B %Y')})"
    table.add_row("Tax", tax_line)

    mot_line = f"[{mot_style}]{vehicle.mot_status.value}[/{mot_style}]"
    if vehicle.mot_expiry_date:
        mot_line += f" (expires {vehicle.mot_expiry_date.strftime('%d %B %Y')})"
    table.add_row("MOT", mot_line)

    return Panel(
        table,
        title=title,
        subtitle=f"[dim]source: {vehicle.source}[/dim]",
        border_style=MOT_STYLES[vehicle.mot_status],
        padding=(1, 2),
    )


def create_mot_table(history: MotHistory, show_defects: bool = False) -> Table:
    """Create a table of MOT tests, most recent first."""
    table = Table(title=f"MOT history ({history.source})", padding=(0, 1))
    table.add_column("Date")
    table.add_column("Result")
    table.add_column("Mileage", justify="right")
    table.add_column("Expiry")
    table.add_column("Defects", justify="right")

    for test in history.mot_tests:
        result = "[green]PASS[/green]" if test.passed else "[red]FAIL[/red]"
        expiry = test.expiry_date.strftime("%d/%m/%Y") if test.expiry_date else "-"
        table.add_row(
            test.completed_date.strftime("%d/%m/%Y"),
            result,
            f"{test.odometer_value:,} {test.odometer_unit.value}",
            expiry,
            str(len(test.defects)),
        )
        if show_defects:
            for defect in test.defects:
                style = DEFECT_STYLES[defect.type]
                table.add_row("", f"[{style}]{defect.type.value}[/{style}]", defect.text, "", "")

    return table


def create_extras_table(extras: ExtrasRecord) -> Table:
    """Create a table of supplementary facts that are present."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")

    labels = {
        "bhp": "Power (bhp)",
        "top_speed": "Top speed",
        "zero_to_sixty": "0-60",
        "insurance_group": "Insurance group",
        "ulez_compliant": "ULEZ compliant",
        "caz_compliant": "CAZ compliant",
        "previous_price": "Previously seen price",
        "previous_mileage": "Previously seen mileage",
        "body_style": "Body style",
        "registration_location": "Registered in",
        "previous_uk_registration": "Previous UK registration",
        "iom_first_registration": "First registered on IoM",
        "model_variant": "Model variant",
        "category": "Category",
    }
    values = extras.model_dump(exclude_none=True, exclude={"sources"})
    for field, label in labels.items():
        if field in values:
            value = values[field]
            if isinstance(value, bool):
                value = "Yes" if value else "No"
            table.add_row(label, str(value))

    table.add_row("Sources", ", ".join(extras.sources))
    return table


def insurance_panel(registration: str, status: InsuranceStatus) -> Panel:
    """Panel for an insurance database check."""
    styles = {
        InsuranceState.INSURED: ("green", "\u2713"),
        InsuranceState.NOT_INSURED: ("red", "\u2717"),
        InsuranceState.UNKNOWN: ("yellow", "?"),
    }
    color, icon = styles[status.state]
    content = (
        f"[bold]{registration}[/bold]\n\n"
        f"Insurance:  [{color}]{icon} {status.status_display}[/{color}]\n"
        f"[dim]{status.message}[/dim]\n"
        f"[dim]Checked {status.checked_at.strftime('%d %B %Y %H:%M')}[/dim]"
    )
    return Panel(content, title="Insurance", border_style=color, padding=(1, 2))
