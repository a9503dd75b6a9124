"""Tests for the Click command line interface."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner
from conftest import EXT_A, EXT_B

from extension_inventory import __version__
from extension_inventory.cli import main
from extension_inventory.collectors.store import ProbeError, StoreProber
from extension_inventory.models import Availability


def _populate(profile):
    profile.add_extension(EXT_A, {"1.0": {"name": "Alpha"}})
    profile.add_extension(EXT_B, {"2.0": {"name": "Bravo"}})
    profile.write_settings({EXT_B: {"state": 0}})


class TestScanCommand:
    def test_print_html(self, profile):
        _populate(profile)
        result = CliRunner().invoke(main, ["scan", str(profile.root), "--print", "--no-probe"])
        assert result.exit_code == 0, result.output
        assert "<h2>Enabled extensions</h2>" in result.stdout
        enabled_part, disabled_part = result.stdout.split("<h2>Disabled extensions</h2>")
        assert "Alpha" in enabled_part
        assert "Bravo" in disabled_part

    def test_writes_html_to_given_path(self, profile, tmp_path):
        _populate(profile)
        target = tmp_path / "out.html"
        result = CliRunner().invoke(main, ["scan", str(profile.root), str(target), "--no-probe"])
        assert result.exit_code == 0, result.output
        assert "Alpha" in target.read_text(encoding="utf-8")

    def test_writes_json_and_html_to_output_dir(self, profile, tmp_path):
        _populate(profile)
        out_dir = tmp_path / "reports"
        result = CliRunner().invoke(
            main,
            ["scan", str(profile.root), "--no-probe", "--format", "html,json", "--output-dir", str(out_dir)],
        )
        assert result.exit_code == 0, result.output
        suffixes = sorted(p.suffix for p in out_dir.iterdir())
        assert suffixes == [".html", ".json"]

    def test_missing_extensions_dir_exits_1(self, tmp_path):
        result = CliRunner().invoke(main, ["scan", str(tmp_path), "--print", "--no-probe"])
        assert result.exit_code == 1
        assert "Extensions path not found" in result.output

    def test_unreadable_extensions_dir_exits_1(self, profile, monkeypatch):
        _populate(profile)

        def denied(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("extension_inventory.engine.list_extension_ids", denied)
        result = CliRunner().invoke(main, ["scan", str(profile.root), "--print", "--no-probe"])
        assert result.exit_code == 1
        assert "Permission denied" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_default_profile_used_when_omitted(self, profile, monkeypatch):
        _populate(profile)
        monkeypatch.setattr("extension_inventory.cli.default_profile_path", lambda: Path(profile.root))
        result = CliRunner().invoke(main, ["scan", "--print", "--no-probe"])
        assert result.exit_code == 0, result.output
        assert "Alpha" in result.stdout

    def test_probe_results_rendered(self, profile, monkeypatch):
        _populate(profile)
        outcomes = {EXT_A: Availability.UNAVAILABLE}

        def fake_probe(self, ext_id):
            if ext_id in outcomes:
                return outcomes[ext_id]
            raise ProbeError(ext_id, "Request failed: timed out")

        monkeypatch.setattr(StoreProber, "probe", fake_probe)
        result = CliRunner().invoke(main, ["scan", str(profile.root), "--print", "--probe-delay", "0"])
        assert result.exit_code == 0, result.output
        assert 'class="unavailable"' in result.stdout
        assert 'class="indeterminate"' in result.stdout

    def test_config_file(self, profile, tmp_path):
        _populate(profile)
        config_path = tmp_path / "config.yaml"
        out_dir = tmp_path / "from-config"
        config_path.write_text(
            f"store:\n  enabled: false\noutput:\n  formats: [json]\n  directory: {out_dir.as_posix()}\n",
            encoding="utf-8",
        )
        result = CliRunner().invoke(main, ["scan", str(profile.root), "--config", str(config_path)])
        assert result.exit_code == 0, result.output
        assert [p.suffix for p in out_dir.iterdir()] == [".json"]


class TestProbeCommand:
    def test_available(self, monkeypatch):
        monkeypatch.setattr(StoreProber, "probe", lambda self, ext_id: Availability.AVAILABLE)
        result = CliRunner().invoke(main, ["probe", EXT_A])
        assert result.exit_code == 0
        assert f"{EXT_A} available" in result.stdout

    def test_unavailable_exit_code(self, monkeypatch):
        monkeypatch.setattr(StoreProber, "probe", lambda self, ext_id: Availability.UNAVAILABLE)
        result = CliRunner().invoke(main, ["probe", EXT_A])
        assert result.exit_code == 2
        assert f"{EXT_A} unavailable" in result.stdout

    def test_indeterminate(self, monkeypatch):
        def failing(self, ext_id):
            raise ProbeError(ext_id, "Request failed: timed out")

        monkeypatch.setattr(StoreProber, "probe", failing)
        result = CliRunner().invoke(main, ["probe", EXT_A])
        assert result.exit_code == 0
        assert f"{EXT_A} indeterminate" in result.stdout

    def test_rejects_bad_id(self):
        result = CliRunner().invoke(main, ["probe", "not-an-id"])
        assert result.exit_code == 1


class TestVersion:
    def test_version_option(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
