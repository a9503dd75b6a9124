"""Rich console report output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from extension_inventory.aggregator import partition
from extension_inventory.models import Availability, ExtensionRecord, InventoryReport

AVAILABILITY_STYLES = {
    Availability.AVAILABLE: "green",
    Availability.UNAVAILABLE: "bold red",
    Availability.INDETERMINATE: "yellow",
}


def _extensions_table(title: str, extensions: list[ExtensionRecord], verbose: bool) -> Table:
    table = Table(title=title)
    table.add_column("Name", width=40)
    table.add_column("Version", width=14)
    table.add_column("Store", width=14)
    table.add_column("ID", style="cyan", width=34)
    if verbose:
        table.add_column("Notes", style="dim")

    for ext in extensions:
        style = AVAILABILITY_STYLES.get(ext.availability, "")
        row = [
            escape(ext.display_name),
            ext.version or "",
            f"[{style}]{ext.availability.value}[/{style}]",
            ext.id,
        ]
        if verbose:
            row.append(escape("; ".join(ext.notes)))
        table.add_row(*row)
    return table


def generate(report: InventoryReport, output_dir: str, verbose: bool = False) -> str:
    """Display the report on the console using Rich.

    Args:
        report: The inventory to display.
        output_dir: Unused for console output, kept for interface consistency.
        verbose: Include per-extension notes.

    Returns:
        Empty string (console output has no file path).
    """
    con = Console()

    con.print()
    con.print("[bold]Extension Inventory[/bold]")
    con.print(f"Profile: {escape(report.profile_path)}")
    con.print(f"Scan: {report.scan_start.isoformat()} to {report.scan_end.isoformat()}")
    con.print()

    enabled, disabled = partition(report.extensions)
    con.print(_extensions_table("Enabled extensions", enabled, verbose))
    con.print()
    con.print(_extensions_table("Disabled extensions", disabled, verbose))
    con.print()

    summary = report.summary or report.compute_summary()
    con.print(
        f"{summary['total']} extensions: "
        f"[green]{summary['available']} available[/green], "
        f"[bold red]{summary['unavailable']} unavailable[/bold red], "
        f"[yellow]{summary['indeterminate']} unknown[/yellow]"
    )
    con.print()

    return ""
