"""CLI entrypoint for inspecting application metadata and comparing versions."""

from __future__ import annotations

import json
from importlib import metadata as importlib_metadata
from typing import Any

import click

from appmeta.common.config import load_config
from appmeta.common.errors import ConfigError, VersionParseError
from appmeta.common.logging import get_logger, setup_logging
from appmeta.metadata.app_info import AppInfo
from appmeta.versioning.version import Version

logger = get_logger(__name__)

_LABELS = {
    "title": "Title",
    "description": "Description",
    "product_name": "Product",
    "company": "Company",
    "copyright": "Copyright",
    "version": "Version",
    "culture": "Culture",
    "module_name": "Module",
    "path": "Path",
    "directory_path": "Directory",
}


def format_report(info: dict[str, Any]) -> str:
    """Format AppInfo fields as a readable report."""
    width = max(len(label) for label in _LABELS.values()) + 2
    lines = [f"{'=' * 50}"]
    for key, label in _LABELS.items():
        lines.append(f"  {label + ':':<{width}} {info.get(key, '')}")
    lines.append(f"{'=' * 50}")
    return "\n".join(lines)


@click.group()
def cli() -> None:
    """Application metadata and version tools."""


@cli.command()
@click.option("--config", "config_path", default="config/default.yaml", help="Config file path")
@click.option("--distribution", default=None, help="Installed distribution name (overrides config)")
@click.option("--module", "module_name", default=None, help="Module whose distribution to inspect")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a report")
def show(config_path: str, distribution: str | None, module_name: str | None, as_json: bool) -> None:
    """Print descriptive metadata for a distribution or module."""
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    setup_logging(cfg.logging.level, cfg.logging.json_output)

    if distribution and module_name:
        raise click.UsageError("Use either --distribution or --module, not both")

    name = distribution or (None if module_name else cfg.metadata.distribution)
    try:
        if name:
            info = AppInfo.for_distribution(name, config=cfg.metadata)
        else:
            info = AppInfo.for_module(module_name or "appmeta", config=cfg.metadata)
    except importlib_metadata.PackageNotFoundError as e:
        raise click.ClickException(f"Distribution not found: {name}") from e
    except ImportError as e:
        raise click.ClickException(f"Module not found: {module_name}") from e

    fields = info.to_dict()
    logger.debug("app_info_resolved", title=fields["title"], version=fields["version"])
    if as_json:
        click.echo(json.dumps(fields, indent=2))
    else:
        click.echo(format_report(fields))


@cli.command()
@click.argument("first")
@click.argument("second")
def compare(first: str, second: str) -> None:
    """Compare two version strings, e.g. "2.0 SP1" and "v2.0.0.1"."""
    try:
        a = Version.parse(first)
        b = Version.parse(second)
    except VersionParseError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2) from e

    symbol = {-1: "<", 0: "==", 1: ">"}[a.compare(b)]
    click.echo(f"{a} {symbol} {b}")


if __name__ == "__main__":
    cli()
