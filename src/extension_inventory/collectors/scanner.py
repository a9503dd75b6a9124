"""Chromium Extensions directory scanner.

An Extensions directory holds one subdirectory per extension id, each of
which holds one or more side-by-side version directories (``1.2.3_0``).
The highest version directory carries the manifest.json that describes the
extension as currently installed.
"""

from __future__ import annotations

import json
import os
import re
from collections.abc import Iterator
from pathlib import Path

from extension_inventory.models import ScannedExtension, SettingsEntry, is_extension_id

_VERSION_DIR_PATTERN = re.compile(r"^(\d+(?:\.\d+)*)(?:_(\d+))?$")

MANIFEST_FILE = "manifest.json"
MESSAGE_PLACEHOLDER_PREFIX = "__MSG_"


def list_extension_ids(extensions_path: str | Path) -> list[str]:
    """Return the entries of an Extensions directory named like extension ids."""
    return sorted(name for name in os.listdir(extensions_path) if is_extension_id(name))


def version_sort_key(name: str) -> tuple[tuple[int, ...], int]:
    """Numeric sort key for a version directory name.

    ``1.10`` sorts above ``1.2`` and ``2.0_1`` above ``2.0``. Names that are
    not version directories sort below all version directories.
    """
    match = _VERSION_DIR_PATTERN.match(name)
    if match is None:
        return ((), -1)
    components = tuple(int(part) for part in match.group(1).split("."))
    suffix = int(match.group(2)) if match.group(2) is not None else -1
    return (components, suffix)


def select_version_dir(names: list[str]) -> str | None:
    """Pick the highest version directory name, or None if there is none."""
    candidates = [n for n in names if _VERSION_DIR_PATTERN.match(n)]
    if not candidates:
        return None
    return max(candidates, key=version_sort_key)


def version_from_dir(version_dir: str) -> str | None:
    """Return the dotted version part of a version directory name."""
    match = _VERSION_DIR_PATTERN.match(version_dir)
    return match.group(1) if match else None


def read_manifest(manifest_path: str | Path) -> dict | None:
    """Read and parse an extension manifest.json file."""
    try:
        with open(manifest_path, "r", encoding="utf-8-sig") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def is_message_placeholder(name: str) -> bool:
    return name.startswith(MESSAGE_PLACEHOLDER_PREFIX)


def resolve_name(manifest_name: object, settings_entry: SettingsEntry | None) -> str | None:
    """Resolve an extension's display name.

    Literal manifest names are used as-is. A ``__MSG_*`` localisation
    placeholder is replaced by the name stored in the profile settings; when
    that is unavailable the name stays unresolved.
    """
    if not isinstance(manifest_name, str) or not manifest_name:
        return None
    if not is_message_placeholder(manifest_name):
        return manifest_name
    if settings_entry is None or not settings_entry.manifest_name:
        return None
    if is_message_placeholder(settings_entry.manifest_name):
        return None
    return settings_entry.manifest_name


def scan_extension(
    extensions_path: str | Path,
    ext_id: str,
    settings_entry: SettingsEntry | None = None,
) -> ScannedExtension:
    """Resolve version and name for one extension directory.

    Never raises: every failure leaves the affected fields unset and adds a
    note explaining why.
    """
    scanned = ScannedExtension(id=ext_id)
    ext_dir = Path(extensions_path) / ext_id

    try:
        with os.scandir(ext_dir) as entries:
            version_dir = select_version_dir([entry.name for entry in entries if entry.is_dir()])
    except OSError as exc:
        scanned.notes.append(f"Cannot list extension directory: {exc}")
        return scanned

    if version_dir is None:
        scanned.notes.append("No version directory installed")
        return scanned

    scanned.version_dir = version_dir
    scanned.version = version_from_dir(version_dir)

    manifest = read_manifest(ext_dir / version_dir / MANIFEST_FILE)
    if manifest is None:
        scanned.notes.append(f"Missing or malformed {MANIFEST_FILE} in {version_dir}")
        return scanned

    manifest_name = manifest.get("name")
    scanned.name = resolve_name(manifest_name, settings_entry)
    if scanned.name is None:
        if isinstance(manifest_name, str) and is_message_placeholder(manifest_name):
            scanned.notes.append(f"Localised name {manifest_name} not found in profile settings")
        else:
            scanned.notes.append(f"{MANIFEST_FILE} has no name")

    return scanned


def scan_extensions(
    extensions_path: str | Path,
    settings: dict[str, SettingsEntry] | None = None,
) -> Iterator[ScannedExtension]:
    """Scan every extension directory under an Extensions root."""
    settings = settings or {}
    for ext_id in list_extension_ids(extensions_path):
        yield scan_extension(extensions_path, ext_id, settings.get(ext_id))
