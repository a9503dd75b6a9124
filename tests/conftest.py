"""Shared test fixtures: on-disk profile builder and fake store prober."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from extension_inventory.collectors.store import ProbeError
from extension_inventory.config import Config
from extension_inventory.models import Availability

EXT_A = "a" * 32
EXT_B = "b" * 32
EXT_C = "c" * 32


class ProfileBuilder:
    """Builds a Chrome profile directory tree under a temporary path."""

    def __init__(self, root: Path):
        self.root = root
        self.extensions = root / "Extensions"
        self.extensions.mkdir(parents=True, exist_ok=True)

    def add_extension(self, ext_id: str, versions: dict[str, dict | str | None]) -> Path:
        """Create an extension with version dirs.

        Each version maps to a manifest dict, raw manifest text, or None for
        a version directory without manifest.json.
        """
        ext_dir = self.extensions / ext_id
        ext_dir.mkdir(parents=True, exist_ok=True)
        for version, manifest in versions.items():
            version_dir = ext_dir / version
            version_dir.mkdir()
            if manifest is None:
                continue
            text = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (version_dir / "manifest.json").write_text(text, encoding="utf-8")
        return ext_dir

    def write_settings(self, settings: dict | str, filename: str = "Secure Preferences") -> Path:
        path = self.root / filename
        if isinstance(settings, str):
            path.write_text(settings, encoding="utf-8")
        else:
            path.write_text(json.dumps({"extensions": {"settings": settings}}), encoding="utf-8")
        return path


class FakeProber:
    """Stands in for StoreProber, returning canned classifications."""

    def __init__(self, results: dict[str, Availability | Exception] | None = None):
        self.results = results or {}
        self.calls: list[str] = []

    def probe(self, ext_id: str) -> Availability:
        self.calls.append(ext_id)
        result = self.results.get(ext_id, Availability.AVAILABLE)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def profile(tmp_path: Path) -> ProfileBuilder:
    """Return an empty profile directory with an Extensions folder."""
    return ProfileBuilder(tmp_path / "Profile 1")


@pytest.fixture
def fake_prober() -> FakeProber:
    return FakeProber()


@pytest.fixture
def profile_config(profile: ProfileBuilder) -> Config:
    """Config pointed at the temporary profile, with no probe delay."""
    return Config(profile_path=str(profile.root), probe_delay_ms=0)


def probe_failure(ext_id: str) -> ProbeError:
    return ProbeError(ext_id, "Request failed: timed out")
