"""Core Pydantic models for Extension Inventory."""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

EXTENSION_ID_PATTERN = re.compile(r"^[a-z]{32}$")

DEFAULT_STORE_URL = "https://chrome.google.com/webstore/detail"


def is_extension_id(value: object) -> bool:
    """Return True if value looks like a Chromium extension identifier."""
    return isinstance(value, str) and EXTENSION_ID_PATTERN.fullmatch(value) is not None


class Availability(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    INDETERMINATE = "indeterminate"


class SettingsEntry(BaseModel):
    """Per-extension entry from the profile's extension settings."""
    state: int | None = None
    manifest_name: str | None = None

    @property
    def disabled(self) -> bool:
        return self.state == 0


class ScannedExtension(BaseModel):
    """What the directory scanner learned about one extension on disk."""
    id: str
    name: str | None = None
    version: str | None = None
    version_dir: str | None = None
    notes: list[str] = Field(default_factory=list)


class ExtensionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    version: str | None = None
    version_dir: str | None = None
    disabled: bool = False
    availability: Availability = Availability.INDETERMINATE
    store_url: str = ""
    notes: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        """Name shown in reports, falling back to the extension id."""
        return self.name or self.id


class InventoryReport(BaseModel):
    report_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    profile_path: str
    extensions_path: str
    scan_start: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    scan_end: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    extensions: list[ExtensionRecord] = Field(default_factory=list)
    summary: dict[str, int] = Field(default_factory=dict)

    @property
    def enabled(self) -> list[ExtensionRecord]:
        return [ext for ext in self.extensions if not ext.disabled]

    @property
    def disabled(self) -> list[ExtensionRecord]:
        return [ext for ext in self.extensions if ext.disabled]

    def compute_summary(self) -> dict[str, int]:
        """Count extensions per availability status and enabled state."""
        counts = {av.value: 0 for av in Availability}
        for ext in self.extensions:
            counts[ext.availability.value] += 1
        counts["total"] = len(self.extensions)
        counts["enabled"] = len(self.enabled)
        counts["disabled"] = len(self.disabled)
        self.summary = counts
        return counts

