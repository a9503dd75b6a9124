"""YAML configuration loader with defaults."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import yaml

from extension_inventory.collectors.settings import DEFAULT_SETTINGS_FILES
from extension_inventory.collectors.store import DEFAULT_TIMEOUT
from extension_inventory.models import DEFAULT_STORE_URL

_DEFAULT_CONFIG_RESOURCE = "extension_inventory.data"
_DEFAULT_CONFIG_FILE = "default_config.yaml"

DEFAULT_PROBE_DELAY_MS = 50
OUTPUT_FORMATS = ("html", "json", "console")


def _as_float(value, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if result >= 0 else default


def _as_bool(value, default: bool) -> bool:
    return value if isinstance(value, bool) else default


class Config:
    """Application configuration loaded from YAML with CLI overrides."""

    def __init__(
        self,
        profile_path: str | None = None,
        settings_files: list[str] | None = None,
        probe_enabled: bool = True,
        store_url: str = DEFAULT_STORE_URL,
        probe_timeout: float = DEFAULT_TIMEOUT,
        probe_delay_ms: float = DEFAULT_PROBE_DELAY_MS,
        output_formats: list[str] | None = None,
        output_directory: str = ".",
        html_path: str | None = None,
        print_html: bool = False,
        verbose: bool = False,
    ):
        self.profile_path = profile_path
        self.settings_files = settings_files or list(DEFAULT_SETTINGS_FILES)
        self.probe_enabled = probe_enabled
        self.store_url = store_url
        self.probe_timeout = probe_timeout
        self.probe_delay_ms = probe_delay_ms
        self.output_formats = output_formats or ["html"]
        self.output_directory = output_directory
        self.html_path = html_path
        self.print_html = print_html
        self.verbose = verbose

    @property
    def probe_delay(self) -> float:
        """Pause between store probes, in seconds."""
        return self.probe_delay_ms / 1000.0

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return cls._from_dict(raw)

    @classmethod
    def from_defaults(cls) -> Config:
        """Load built-in default configuration."""
        try:
            ref = resources.files(_DEFAULT_CONFIG_RESOURCE).joinpath(_DEFAULT_CONFIG_FILE)
            raw = yaml.safe_load(ref.read_text(encoding="utf-8")) or {}
            return cls._from_dict(raw)
        except (FileNotFoundError, TypeError):
            return cls()

    @classmethod
    def _from_dict(cls, raw: dict) -> Config:
        """Parse a raw dict into Config."""
        if not isinstance(raw, dict):
            raw = {}
        profile_section = raw.get("profile") or {}
        store_section = raw.get("store") or {}
        output_section = raw.get("output") or {}

        settings_files = profile_section.get("settings_files")
        if not isinstance(settings_files, list):
            settings_files = None

        formats = output_section.get("formats")
        if isinstance(formats, list):
            formats = [str(f).strip().lower() for f in formats if str(f).strip().lower() in OUTPUT_FORMATS]
        else:
            formats = None

        return cls(
            profile_path=profile_section.get("path"),
            settings_files=settings_files,
            probe_enabled=_as_bool(store_section.get("enabled"), True),
            store_url=str(store_section.get("base_url", DEFAULT_STORE_URL)),
            probe_timeout=_as_float(store_section.get("timeout_seconds"), DEFAULT_TIMEOUT),
            probe_delay_ms=_as_float(store_section.get("probe_delay_ms"), DEFAULT_PROBE_DELAY_MS),
            output_formats=formats,
            output_directory=str(output_section.get("directory", ".")),
        )

    def apply_overrides(
        self,
        profile_path: str | None = None,
        html_path: str | None = None,
        output_dir: str | None = None,
        formats: str | None = None,
        probe_delay_ms: float | None = None,
        print_html: bool = False,
        no_probe: bool = False,
        verbose: bool = False,
    ) -> None:
        """Apply CLI flag overrides to this config."""
        if profile_path:
            self.profile_path = profile_path
        if html_path:
            self.html_path = html_path
        if output_dir:
            self.output_directory = output_dir
        if formats:
            requested = [f.strip().lower() for f in formats.split(",")]
            self.output_formats = [f for f in requested if f in OUTPUT_FORMATS] or self.output_formats
        if probe_delay_ms is not None and probe_delay_ms >= 0:
            self.probe_delay_ms = probe_delay_ms
        if print_html:
            self.print_html = True
        if no_probe:
            self.probe_enabled = False
        if verbose:
            self.verbose = True
