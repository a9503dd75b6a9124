"""JSON report output."""

from __future__ import annotations

import os
from pathlib import Path

from extension_inventory.models import InventoryReport


def generate(report: InventoryReport, output_dir: str) -> str:
    """Serialize the report to a JSON file.

    Args:
        report: The inventory to serialize.
        output_dir: Directory to write the report file.

    Returns:
        Path to the generated JSON file.
    """
    os.makedirs(output_dir, exist_ok=True)

    timestamp = report.scan_start.strftime("%Y%m%d_%H%M%S")
    filename = f"chrome-extensions-{timestamp}.json"
    filepath = Path(output_dir) / filename

    json_str = report.model_dump_json(indent=2)
    filepath.write_text(json_str, encoding="utf-8")

    return str(filepath)
