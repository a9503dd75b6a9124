"""HTML report output via Jinja2 templating."""

from __future__ import annotations

import os
import re
from datetime import datetime
from importlib import resources
from pathlib import Path

from jinja2 import BaseLoader, Environment

from extension_inventory.aggregator import partition
from extension_inventory.models import InventoryReport

AVAILABILITY_TITLES = {
    "available": "Listed in the Chrome Web Store",
    "unavailable": "No longer listed in the Chrome Web Store",
    "indeterminate": "Store listing could not be checked",
}


def _load_template() -> str:
    """Load the HTML template from package data."""
    ref = resources.files("extension_inventory.templates").joinpath("report.html.j2")
    return ref.read_text(encoding="utf-8")


def default_filename(moment: datetime) -> str:
    """File name for a report, e.g. ``chrome-extensions-2024-05-01-12-30-00-123.html``."""
    stamp = moment.replace(tzinfo=None).isoformat(timespec="milliseconds")
    stamp = re.sub(r"\D", "-", stamp)
    return f"chrome-extensions-{stamp}.html"


def render(report: InventoryReport) -> str:
    """Render the inventory as a self-contained HTML document."""
    env = Environment(loader=BaseLoader(), autoescape=True)
    template = env.from_string(_load_template())

    enabled, disabled = partition(report.extensions)
    summary = report.summary or report.compute_summary()

    return template.render(
        report=report,
        enabled=enabled,
        disabled=disabled,
        summary=summary,
        availability_titles=AVAILABILITY_TITLES,
    )


def generate(report: InventoryReport, output_dir: str, path: str | None = None) -> str:
    """Write the HTML report to disk.

    Args:
        report: The inventory to render.
        output_dir: Directory for the default file name.
        path: Explicit output file, overrides output_dir.

    Returns:
        Path to the generated HTML file.
    """
    if path:
        filepath = Path(path)
        filepath.parent.mkdir(parents=True, exist_ok=True)
    else:
        os.makedirs(output_dir, exist_ok=True)
        filepath = Path(output_dir) / default_filename(report.scan_start)

    filepath.write_text(render(report), encoding="utf-8")

    return str(filepath)
