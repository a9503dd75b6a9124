"""Platform detection and browser profile resolution."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

EXTENSIONS_DIR = "Extensions"
DEFAULT_PROFILE_DIR = "Default"


class ProfileNotFoundError(Exception):
    """Raised when no Extensions directory exists under a profile path."""

    def __init__(self, profile_path: str | Path, candidates: list[Path]):
        self.profile_path = str(profile_path)
        self.candidates = candidates
        tried = ", ".join(str(c) for c in candidates)
        super().__init__(f"Extensions path not found (tried: {tried})")


@dataclass(frozen=True)
class ProfileLocation:
    """A browser profile directory and the Extensions directory inside it."""
    profile_path: Path
    extensions_path: Path


def is_windows() -> bool:
    """Return True if running on Windows."""
    return sys.platform == "win32"


def is_macos() -> bool:
    """Return True if running on macOS."""
    return sys.platform == "darwin"


def default_profile_path() -> Path:
    """Return the default Google Chrome user data directory for this platform.

    The directory is not checked for existence.
    """
    home = Path.home()
    if is_windows():
        local_app_data = os.environ.get("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else home / "AppData" / "Local"
        return base / "Google" / "Chrome" / "User Data"
    if is_macos():
        return home / "Library" / "Application Support" / "Google" / "Chrome"
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else home / ".config"
    return base / "google-chrome"


def resolve_profile(profile_path: str | Path) -> ProfileLocation:
    """Find the Extensions directory for a profile.

    Accepts either a profile directory (containing ``Extensions``) or a
    browser user data directory (containing ``Default/Extensions``).

    Raises:
        ProfileNotFoundError: if neither candidate exists.
    """
    root = Path(profile_path).expanduser().resolve()
    candidates = [
        root / EXTENSIONS_DIR,
        root / DEFAULT_PROFILE_DIR / EXTENSIONS_DIR,
    ]
    for candidate in candidates:
        if candidate.is_dir():
            return ProfileLocation(profile_path=candidate.parent, extensions_path=candidate)
    raise ProfileNotFoundError(profile_path, candidates)
