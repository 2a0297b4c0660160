"""
Rich formatting utilities for CLI output.
"""

from typing import Mapping, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pkgbridge.backends.base import Backend
from pkgbridge.core.detector import HostContext
from pkgbridge.install.models import AttemptResult, InstallOutcome, InstallState
from pkgbridge.parallel.aggregator import Inventory


def _state_icon_and_color(state: InstallState) -> tuple[str, str]:
    """Map an outcome state to icon and color."""
    if state == InstallState.INSTALLED:
        return "✓", "green"
    if state == InstallState.ALREADY_PRESENT:
        return "•", "cyan"
    if state == InstallState.BACKEND_UNAVAILABLE:
        return "⚠", "yellow"
    return "✗", "red"


_ATTEMPT_COLORS = {
    AttemptResult.INSTALLED: "green",
    AttemptResult.ALREADY_PRESENT: "cyan",
    AttemptResult.BACKEND_UNAVAILABLE: "dim",
    AttemptResult.NOT_FOUND: "yellow",
    AttemptResult.EXISTENCE_INCONCLUSIVE: "yellow",
    AttemptResult.INSTALL_FAILED: "red",
}


def print_host_info(host: HostContext, console: Console) -> None:
    """Print detected host information."""
    table = Table(title="Host", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Operating System", host.os_type)
    if host.distro:
        table.add_row("Distribution", host.distro)
    table.add_row("Family", host.family or "-")
    table.add_row("Platform", host.platform)
    table.add_row("Hostname", host.hostname)
    if host.preferences:
        table.add_row("Preferred", ", ".join(host.preferences))

    console.print()
    console.print(table)
    console.print()


def format_outcome(outcome: InstallOutcome, console: Console) -> None:
    """Format and display the outcome of one ensure call."""
    icon, color = _state_icon_and_color(outcome.state)

    content: list[str] = [
        f"[bold]Package:[/bold] {outcome.package}",
        f"[bold]State:[/bold] [{color}]{outcome.state.value.upper()}[/{color}]",
    ]
    if outcome.backend:
        content.append(f"[bold]Manager:[/bold] {outcome.backend}")

    console.print()
    console.print(Panel("\n".join(content), title=f"{icon} {outcome.package}", border_style=color, expand=False))

    if outcome.attempts:
        table = Table(show_header=True, box=None, padding=(0, 2))
        table.add_column("Manager", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Result")
        table.add_column("Detail", style="dim")
        for attempt in outcome.attempts:
            attempt_color = _ATTEMPT_COLORS.get(attempt.result, "white")
            table.add_row(
                attempt.backend,
                attempt.package or "-",
                f"[{attempt_color}]{attempt.result.value}[/{attempt_color}]",
                attempt.detail,
            )
        console.print(table)
    console.print()


def format_inventory(inventory: Inventory, console: Console) -> None:
    """Print installed packages grouped by manager."""
    grouped = inventory.by_manager()
    if not grouped and not inventory.failures:
        console.print("[yellow]No package managers found on this host.[/yellow]")
        return

    for manager, entries in grouped.items():
        if manager in inventory.failures:
            continue
        table = Table(title=f"{manager} ({len(entries)})", show_header=True, header_style="bold", title_justify="left")
        table.add_column("Package", style="cyan")
        table.add_column("Version", style="white")
        for entry in entries:
            table.add_row(entry.name, entry.version or "-")
        console.print(table)
        console.print()

    for manager, error in inventory.failures.items():
        console.print(f"[red]✗ {manager}:[/red] [dim]{error}[/dim]")

    console.print(f"[bold]Total:[/bold] {len(inventory)} packages across {len(grouped) - len(inventory.failures)} managers")


def print_managers(
    backends: Mapping[str, Backend],
    native: Sequence[str],
    candidates: Sequence[str],
    probe,
    console: Console,
) -> None:
    """Print every registered manager with availability and chain position."""
    table = Table(title="Package Managers", show_header=True, header_style="bold")
    table.add_column("Manager", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Available")
    table.add_column("Order", justify="right")
    table.add_column("Role", style="dim")

    for name, backend in backends.items():
        available = probe.available(backend.executable)
        order = str(candidates.index(name) + 1) if name in candidates else ""
        role = "native" if name in native else ("universal" if name in candidates else "")
        table.add_row(
            name,
            backend.description,
            "[green]yes[/green]" if available else "[dim]no[/dim]",
            order,
            role,
        )

    console.print(table)
