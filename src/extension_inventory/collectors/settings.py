"""Reader for the profile-wide extension settings (Preferences files)."""

from __future__ import annotations

import json
from pathlib import Path

from extension_inventory.models import SettingsEntry, is_extension_id

# Read in order; later files win for the same extension id.
DEFAULT_SETTINGS_FILES: tuple[str, ...] = ("Preferences", "Secure Preferences")


def _load_json(path: Path) -> dict | None:
    """Read a JSON object from disk. Returns None if missing or malformed."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def _parse_entry(raw: dict) -> SettingsEntry:
    state = raw.get("state")
    # JSON booleans are not states: only a real integer 0 means disabled
    if isinstance(state, bool) or not isinstance(state, int):
        state = None

    manifest_name = None
    manifest = raw.get("manifest")
    if isinstance(manifest, dict) and isinstance(manifest.get("name"), str):
        manifest_name = manifest["name"]

    return SettingsEntry(state=state, manifest_name=manifest_name)


def parse_extension_settings(document: dict) -> dict[str, SettingsEntry]:
    """Extract ``extensions.settings`` from a parsed Preferences document.

    Entries that are not keyed by an extension id or are not objects are
    skipped.
    """
    extensions = document.get("extensions")
    if not isinstance(extensions, dict):
        return {}
    settings = extensions.get("settings")
    if not isinstance(settings, dict):
        return {}

    result: dict[str, SettingsEntry] = {}
    for ext_id, raw in settings.items():
        if not is_extension_id(ext_id) or not isinstance(raw, dict):
            continue
        result[ext_id] = _parse_entry(raw)
    return result


def read_settings(
    profile_path: str | Path,
    filenames: tuple[str, ...] | list[str] = DEFAULT_SETTINGS_FILES,
) -> dict[str, SettingsEntry]:
    """Load extension settings for a profile.

    Args:
        profile_path: Profile directory (the parent of ``Extensions``).
        filenames: Settings documents to read, relative to the profile.

    Returns:
        Mapping of extension id to SettingsEntry. Empty if no document could
        be read.
    """
    merged: dict[str, SettingsEntry] = {}
    for filename in filenames:
        document = _load_json(Path(profile_path) / filename)
        if document is None:
            continue
        merged.update(parse_extension_settings(document))
    return merged
