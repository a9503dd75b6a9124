"""Click CLI interface for Extension Inventory."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from extension_inventory import __version__
from extension_inventory.collectors.store import ProbeError, StoreProber
from extension_inventory.config import Config
from extension_inventory.engine import Engine
from extension_inventory.models import Availability, is_extension_id
from extension_inventory.platform import ProfileNotFoundError, default_profile_path
from extension_inventory.reporters import console_reporter, html_reporter, json_reporter

console = Console(stderr=True)


def _load_config(config_path: str | None) -> Config:
    if config_path:
        return Config.from_yaml(config_path)
    return Config.from_defaults()


@click.group()
@click.version_option(version=__version__, prog_name="extension-inventory")
def main():
    """Extension Inventory - list installed Chrome extensions and check the Web Store."""


@main.command()
@click.argument("profile_path", required=False, type=click.Path(file_okay=False))
@click.argument("html_path", required=False, type=click.Path(dir_okay=False))
@click.option("--print", "print_html", is_flag=True, help="Write the HTML report to stdout instead of a file")
@click.option("--format", "formats", default=None, help="Output formats: html,json,console (default: html)")
@click.option("--output-dir", default=None, help="Output directory for reports (default: current directory)")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to config YAML")
@click.option("--no-probe", is_flag=True, help="Do not check extensions against the Chrome Web Store")
@click.option("--probe-delay", type=float, default=None, help="Milliseconds to wait between store requests (default: 50)")
@click.option("--verbose", is_flag=True, help="Show why fields could not be resolved")
def scan(
    profile_path: str | None,
    html_path: str | None,
    print_html: bool,
    formats: str | None,
    output_dir: str | None,
    config_path: str | None,
    no_probe: bool,
    probe_delay: float | None,
    verbose: bool,
):
    """Export the extensions installed in a Chrome profile.

    PROFILE_PATH is a profile directory (containing Extensions) or a Chrome
    user data directory (containing Default/Extensions). Defaults to this
    platform's Chrome user data directory. HTML_PATH overrides the generated
    report file name.
    """
    config = _load_config(config_path)
    config.apply_overrides(
        profile_path=profile_path,
        html_path=html_path,
        output_dir=output_dir,
        formats=formats,
        probe_delay_ms=probe_delay,
        print_html=print_html,
        no_probe=no_probe,
        verbose=verbose,
    )
    if not config.profile_path:
        config.profile_path = str(default_profile_path())

    engine = Engine(config)
    try:
        report = engine.run()
    except (ProfileNotFoundError, OSError) as exc:
        console.print(f"[bold red]ERROR: {exc}[/bold red]")
        sys.exit(1)

    if config.print_html:
        click.echo(html_reporter.render(report))
        return

    output_files: list[str] = []
    for fmt in config.output_formats:
        if fmt == "console":
            console_reporter.generate(report, config.output_directory, verbose=config.verbose)
        elif fmt == "json":
            output_files.append(json_reporter.generate(report, config.output_directory))
        elif fmt == "html":
            output_files.append(html_reporter.generate(report, config.output_directory, path=config.html_path))

    if output_files:
        console.print("[bold]Reports written:[/bold]")
        for path in output_files:
            console.print(f"  {path}")


@main.command()
@click.argument("extension_id")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to config YAML")
def probe(extension_id: str, config_path: str | None):
    """Check whether EXTENSION_ID is still listed in the Chrome Web Store."""
    if not is_extension_id(extension_id):
        console.print(f"[bold red]ERROR: not an extension id: {extension_id}[/bold red]")
        sys.exit(1)

    config = _load_config(config_path)
    prober = StoreProber(base_url=config.store_url, timeout=config.probe_timeout)
    try:
        availability = prober.probe(extension_id)
    except ProbeError as exc:
        availability = Availability.INDETERMINATE
        console.print(f"[yellow]{exc.reason}[/yellow]")

    click.echo(f"{extension_id} {availability.value}")
    if availability == Availability.UNAVAILABLE:
        sys.exit(2)
