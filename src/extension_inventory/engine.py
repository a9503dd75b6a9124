"""Extension discovery, store probing, and report assembly."""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from extension_inventory.aggregator import merge, order_records
from extension_inventory.collectors.scanner import list_extension_ids, scan_extension
from extension_inventory.collectors.settings import read_settings
from extension_inventory.collectors.store import ProbeError, StoreProber
from extension_inventory.config import Config
from extension_inventory.models import (
    Availability,
    ExtensionRecord,
    InventoryReport,
    ScannedExtension,
    SettingsEntry,
)
from extension_inventory.platform import ProfileLocation, resolve_profile
from extension_inventory.throttle import IntervalGate

console = Console(stderr=True)


class Engine:
    """Inventories one browser profile, producing an InventoryReport."""

    def __init__(
        self,
        config: Config,
        prober: StoreProber | None = None,
        gate: IntervalGate | None = None,
        show_progress: bool = True,
    ):
        self.config = config
        self.prober = prober or StoreProber(base_url=config.store_url, timeout=config.probe_timeout)
        self.gate = gate or IntervalGate(config.probe_delay)
        self.show_progress = show_progress
        self.settings: dict[str, SettingsEntry] = {}

    def locate(self) -> ProfileLocation:
        """Resolve the configured profile path.

        Raises:
            ProfileNotFoundError: if the profile has no Extensions directory.
        """
        return resolve_profile(self.config.profile_path or ".")

    def _warn(self, message: str) -> None:
        if self.config.verbose:
            console.print(f"[dim]{message}[/dim]")

    def _probe(self, ext_id: str) -> tuple[Availability, list[str]]:
        if not self.config.probe_enabled:
            return Availability.INDETERMINATE, ["Store probe disabled"]
        try:
            with self.gate:
                return self.prober.probe(ext_id), []
        except ProbeError as exc:
            return Availability.INDETERMINATE, [f"Store probe failed: {exc.reason}"]
        except Exception as exc:
            return Availability.INDETERMINATE, [f"{type(exc).__name__}: {exc}"]

    def process(self, extensions_path, ext_id: str) -> ExtensionRecord:
        """Scan, probe and merge a single extension.

        Errors never escape: an unexpected failure in scanning or probing
        only leaves the fields it affects unset, with a note.
        """
        entry = self.settings.get(ext_id)
        try:
            scanned = scan_extension(extensions_path, ext_id, entry)
        except Exception as exc:
            scanned = ScannedExtension(id=ext_id, notes=[f"{type(exc).__name__}: {exc}"])
        availability, notes = self._probe(ext_id)
        record = merge(scanned, entry, availability, store_url=self.config.store_url, notes=notes)
        for note in record.notes:
            self._warn(f"{ext_id}: {note}")
        return record

    def run(self) -> InventoryReport:
        """Inventory every extension in the configured profile.

        Returns:
            InventoryReport with ordered extension records and summary.

        Raises:
            ProfileNotFoundError: before any extension is processed.
        """
        location = self.locate()
        scan_start = datetime.now(timezone.utc)

        self.settings = read_settings(location.profile_path, tuple(self.config.settings_files))
        if not self.settings:
            self._warn("No extension settings found; disabled state and localised names unavailable")

        ext_ids = list_extension_ids(location.extensions_path)
        records: list[ExtensionRecord] = []

        with Progress(
            SpinnerColumn(spinner_name="line"),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=console,
            disable=not self.show_progress,
            transient=True,
        ) as progress:
            task = progress.add_task("Exporting", total=len(ext_ids))

            for ext_id in ext_ids:
                progress.update(task, description=f"[cyan]{ext_id}[/cyan]")
                records.append(self.process(location.extensions_path, ext_id))
                progress.advance(task)

        report = InventoryReport(
            profile_path=str(location.profile_path),
            extensions_path=str(location.extensions_path),
            scan_start=scan_start,
            scan_end=datetime.now(timezone.utc),
            extensions=order_records(records),
        )
        report.compute_summary()

        return report


def collect_inventory(config: Config, prober: StoreProber | None = None) -> InventoryReport:
    """Inventory a profile without progress output."""
    return Engine(config, prober=prober, show_progress=False).run()
