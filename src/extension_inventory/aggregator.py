"""Merge scanner, settings and store results into ordered extension records."""

from __future__ import annotations

import unicodedata

from extension_inventory.models import (
    DEFAULT_STORE_URL,
    Availability,
    ExtensionRecord,
    ScannedExtension,
    SettingsEntry,
)


def merge(
    scanned: ScannedExtension,
    settings_entry: SettingsEntry | None,
    availability: Availability,
    store_url: str = DEFAULT_STORE_URL,
    notes: list[str] | None = None,
) -> ExtensionRecord:
    """Combine everything known about one extension into its record.

    An extension with no settings entry is treated as enabled.
    """
    return ExtensionRecord(
        id=scanned.id,
        name=scanned.name,
        version=scanned.version,
        version_dir=scanned.version_dir,
        disabled=settings_entry is not None and settings_entry.disabled,
        availability=availability,
        store_url=f"{store_url.rstrip('/')}/{scanned.id}",
        notes=tuple(scanned.notes) + tuple(notes or ()),
    )


def name_sort_key(name: str | None) -> str:
    """Case and accent insensitive collation key. Missing names sort first."""
    if not name:
        return ""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def order_records(records: list[ExtensionRecord]) -> list[ExtensionRecord]:
    """Enabled extensions first, then disabled, each group sorted by name."""
    return sorted(records, key=lambda r: (r.disabled, name_sort_key(r.name), r.id))


def partition(records: list[ExtensionRecord]) -> tuple[list[ExtensionRecord], list[ExtensionRecord]]:
    """Split records into (enabled, disabled), preserving order."""
    enabled = [r for r in records if not r.disabled]
    disabled = [r for r in records if r.disabled]
    return enabled, disabled
