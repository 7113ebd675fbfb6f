"""
Click-based CLI for SettingsBridge.
"""

import json
import sys
from pathlib import Path
from typing import IO, NoReturn

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .application import ApplyService, DescribeService, ListService
from .config import LOG_LEVELS, BridgeConfig, load_config
from .core.encoder import SeparatorStyle
from .core.registry import CapabilityRegistry
from .domain.errors import DecodeError
from .log import configure_logging, err_console
from .targets import CatalogResolver, SettingItem, SettingsCatalog

console = Console()


def default_registries() -> list[CapabilityRegistry]:
    """Registries for every target type the CLI can dispatch to."""
    return [CapabilityRegistry.build(SettingItem)]


def _fail(label: str, error: object) -> NoReturn:
    err_console.print(f"[red]✗ {label}:[/red] {escape(str(error))}", soft_wrap=True)
    sys.exit(1)


def _echo(line: str) -> None:
    console.print(line, markup=False, highlight=False, soft_wrap=True)


def _load_catalog(config: BridgeConfig) -> SettingsCatalog:
    if config.catalog is None:
        _fail(
            "Error",
            "No settings catalog configured (use --catalog or SETTINGSBRIDGE_CATALOG)",
        )
    try:
        return SettingsCatalog.load(config.catalog)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        _fail("Invalid catalog", e)


@click.group()
@click.version_option(version=__version__, prog_name="settingsbridge")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON configuration file",
)
@click.option(
    "--catalog",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="SETTINGSBRIDGE_CATALOG",
    help="Settings catalog file (env: SETTINGSBRIDGE_CATALOG)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="SETTINGSBRIDGE_LOG_LEVEL",
    help="Log level for stderr diagnostics (default: WARNING)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    catalog: Path | None,
    log_level: str | None,
) -> None:
    """SettingsBridge CLI: call exposed setting methods from JSON commands"""
    try:
        config = load_config(config_path).merged(catalog=catalog, log_level=log_level)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        _fail("Invalid configuration", e)

    configure_logging(config.log_level)
    ctx.obj = config


@cli.command()
@click.argument("input_file", type=click.File("rb"), default="-")
@click.option(
    "--legacy-separators",
    is_flag=True,
    help="Terminate every record with ',' and a newline (legacy output format)",
)
@click.pass_obj
def apply(config: BridgeConfig, input_file: IO[bytes], legacy_separators: bool) -> None:
    """Run a JSON array of commands and print one result record per command

    Examples:
        echo '[{"target": "X", "method": "GetValue", "arguments": {}}]' | settingsbridge apply
        settingsbridge --catalog settings.json apply commands.json
    """
    catalog = _load_catalog(config)
    style = SeparatorStyle.LEGACY if legacy_separators else config.separator_style

    service = ApplyService(resolver=CatalogResolver(catalog), registries=default_registries())
    try:
        service.run(source=input_file, sink=sys.stdout, style=style)
    except DecodeError as e:
        _fail("Invalid JSON", e)


@cli.command()
@click.option("--json", "json_output", is_flag=True, help="Output descriptors as JSON")
def methods(json_output: bool) -> None:
    """Describe the exposed methods and their parameters"""
    service = DescribeService(registries=default_registries())
    if json_output:
        print(json.dumps(service.run().targets))
        return
    for line in service.signatures():
        _echo(line)


@cli.command(name="list")
@click.option("--all", "include_all", is_flag=True, help="Include Custom and collection settings")
@click.option("--json", "json_output", is_flag=True, help="Output the listing as JSON")
@click.pass_obj
def list_settings(config: BridgeConfig, include_all: bool, json_output: bool) -> None:
    """List setting identifiers and their types"""
    catalog = _load_catalog(config)
    result = ListService(directory=catalog).run(include_all=include_all)

    if json_output:
        print(json.dumps(result.targets))
        return
    for entry in result.targets:
        _echo(f"{entry['id']}: {entry['type']}")


if __name__ == "__main__":
    cli()
