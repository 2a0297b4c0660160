"""
Main CLI application using Typer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console

from pkgbridge.__version__ import __version__
from pkgbridge.backends.registry import build_backends, resolve_name
from pkgbridge.cli.formatters import (
    format_inventory,
    format_outcome,
    print_host_info,
    print_managers,
)
from pkgbridge.core.config import resolve_config
from pkgbridge.core.detector import HostDetector
from pkgbridge.core.errors import UnknownBackendError
from pkgbridge.core.executor import CommandRunner
from pkgbridge.core.probe import CommandProbe
from pkgbridge.install.catalog import HostCatalog
from pkgbridge.install.models import PackageRequest
from pkgbridge.install.orchestrator import InstallOrchestrator
from pkgbridge.parallel.aggregator import InventoryAggregator
from pkgbridge.storage.csv_handler import InventoryCSV
from pkgbridge.storage.logger import setup_logging

app = typer.Typer(
    name="pkgbridge",
    help="Install and list packages across every package manager on this host",
    add_completion=False,
)

console = Console()

LOG_DIR_OPTION = typer.Option(None, "--log-dir", help="Directory for log files")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show every package-manager command")
FORMAT_OPTION = typer.Option("rich", "--format", "-f", help="Output format: 'rich' (default) or 'json'")


def _init_context(
    log_dir: Optional[Path],
    verbose: bool,
    prefer: Optional[List[str]] = None,
    quiet: bool = False,
):
    """
    Initialize shared objects: config, logger, probe, backends and host context.
    Uses the optional config file (~/.pkgbridge.yaml or ./.pkgbridge.yaml) and
    the environment (SUDO, PKGBRIDGE_*) for values the CLI does not set.
    """
    config = resolve_config(log_dir=log_dir, verbose=verbose, prefer=prefer)
    app_logger = setup_logging(config.log_dir, config.verbose, quiet=quiet)

    probe = CommandProbe()
    runner = CommandRunner(app_logger, timeout=config.timeout)
    backends = build_backends(runner, config, app_logger)
    host = HostDetector().detect(preferences=config.prefer)

    return config, app_logger, probe, backends, host


def _parse_aliases(values: Optional[List[str]]) -> Dict[str, str]:
    """Turn ["nix=ripgrep", ...] into {"nix-env": "ripgrep", ...}."""
    aliases: Dict[str, str] = {}
    for value in values or []:
        manager, sep, name = value.partition("=")
        if not sep or not manager.strip() or not name.strip():
            raise typer.BadParameter(f"expected MANAGER=NAME, got '{value}'", param_hint="--alias")
        try:
            aliases[resolve_name(manager)] = name.strip()
        except UnknownBackendError as e:
            raise typer.BadParameter(str(e), param_hint="--alias")
    return aliases


def _check_format(output_format: str) -> None:
    if output_format not in ("rich", "json"):
        raise typer.BadParameter("must be 'rich' or 'json'", param_hint="--format")


@app.command()
def ensure(
    package: str = typer.Argument(..., help="Package name"),
    variants: Optional[List[str]] = typer.Option(
        None,
        "--variant",
        help="Alternate name to try if the first is not found (repeatable)",
    ),
    aliases: Optional[List[str]] = typer.Option(
        None,
        "--alias",
        help="Manager-specific name, e.g. nix=ripgrep (repeatable)",
    ),
    prefer: Optional[List[str]] = typer.Option(
        None,
        "--prefer",
        "-p",
        help="Try this manager first, e.g. nix or cargo (repeatable)",
    ),
    output_format: str = FORMAT_OPTION,
    log_dir: Optional[Path] = LOG_DIR_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Make sure a package is installed, trying each available manager in turn.
    """
    _check_format(output_format)
    request = PackageRequest(
        name=package,
        variants=variants or [],
        aliases=_parse_aliases(aliases),
    )
    config, app_logger, probe, backends, host = _init_context(
        log_dir, verbose, prefer, quiet=output_format == "json"
    )

    catalog = HostCatalog(backends, probe, app_logger)
    orchestrator = InstallOrchestrator(catalog, probe, app_logger)
    outcome = orchestrator.ensure(request, host)

    if output_format == "json":
        console.print_json(json.dumps(outcome.model_dump(mode="json")))
    else:
        format_outcome(outcome, console)

    if not outcome.ok:
        raise typer.Exit(1)


@app.command()
def installed(
    managers: Optional[List[str]] = typer.Option(
        None,
        "--manager",
        "-m",
        help="Only list packages from this manager (repeatable)",
    ),
    csv_path: Optional[Path] = typer.Option(
        None,
        "--csv",
        help="Also write the inventory to this CSV file",
    ),
    output_format: str = FORMAT_OPTION,
    log_dir: Optional[Path] = LOG_DIR_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    List globally installed packages grouped by package manager.
    """
    _check_format(output_format)
    config, app_logger, probe, backends, host = _init_context(
        log_dir, verbose, quiet=output_format == "json"
    )

    aggregator = InventoryAggregator(backends, probe, app_logger, max_workers=config.max_workers)
    try:
        inventory = aggregator.collect(managers)
    except UnknownBackendError as e:
        raise typer.BadParameter(str(e), param_hint="--manager")

    if output_format == "json":
        console.print_json(json.dumps(inventory.model_dump(mode="json")))
    else:
        format_inventory(inventory, console)

    if csv_path is not None:
        rows = InventoryCSV(csv_path).write(inventory.entries, hostname=host.hostname)
        if output_format != "json":
            console.print(f"[dim]Wrote {rows} rows to {csv_path}[/dim]")


@app.command("managers")
def managers_cmd(
    prefer: Optional[List[str]] = typer.Option(
        None,
        "--prefer",
        "-p",
        help="Show the order with this manager preferred (repeatable)",
    ),
    log_dir: Optional[Path] = LOG_DIR_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """
    Show the host, its install order and which package managers are available.
    """
    config, app_logger, probe, backends, host = _init_context(log_dir, verbose, prefer)
    catalog = HostCatalog(backends, probe, app_logger)

    print_host_info(host, console)
    print_managers(
        backends,
        catalog.native_chain(host),
        catalog.candidate_names(host),
        probe,
        console,
    )


def _version_callback(value: bool):
    if value:
        console.print(f"pkgbridge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    pkgbridge - one interface to brew, apt, dnf, pacman, nix, cargo, npm and more.
    """


if __name__ == "__main__":
    app()
