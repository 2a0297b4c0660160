"""
Parallel inventory collection.
Queries every available backend's listing concurrently and merges the results.
"""

from __future__ import annotations

import concurrent.futures
from typing import Dict, List, Mapping, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from pkgbridge.backends.base import Backend, InstalledEntry
from pkgbridge.backends.registry import resolve_name


class Inventory(BaseModel):
    """Installed packages across managers (duplicates across managers kept)."""

    entries: List[InstalledEntry] = Field(default_factory=list)
    failures: Dict[str, str] = Field(default_factory=dict)
    managers: List[str] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def by_manager(self) -> Dict[str, List[InstalledEntry]]:
        """Entries grouped by manager, in listing order."""
        grouped: Dict[str, List[InstalledEntry]] = {name: [] for name in self.managers}
        for entry in self.entries:
            grouped.setdefault(entry.manager, []).append(entry)
        return grouped

    def sorted(self) -> List[InstalledEntry]:
        """Entries in a stable (manager, name) order."""
        return sorted(self.entries, key=lambda e: (e.manager, e.name.lower()))

    def find(self, name: str) -> List[InstalledEntry]:
        """Every entry with this package name, under any manager."""
        return [e for e in self.entries if e.name == name]


class InventoryAggregator:
    """
    Collect installed-package listings from every available backend.
    """

    def __init__(
        self,
        backends: Mapping[str, Backend],
        probe,
        app_logger=None,
        max_workers: int = 8,
    ):
        """
        Initialize aggregator.

        Args:
            backends: Backends by manager name, in registry order
            probe: Command availability probe
            app_logger: Logger (defaults to the loguru logger)
            max_workers: Maximum listing commands run at once
        """
        self.backends = backends
        self.probe = probe
        self.logger = app_logger or logger
        self.max_workers = max_workers

    def available_backends(self, managers: Optional[Sequence[str]] = None) -> List[Backend]:
        """Backends whose executable is present, optionally restricted by name."""
        if managers:
            names = [resolve_name(m) for m in managers]
        else:
            names = list(self.backends)
        return [
            self.backends[name] for name in names
            if name in self.backends and self.probe.available(self.backends[name].executable)
        ]

    def collect(self, managers: Optional[Sequence[str]] = None) -> Inventory:
        """
        Run every available backend's listing and merge the results.

        A backend whose listing fails contributes zero entries and is
        recorded in ``Inventory.failures``; the others are unaffected.
        """
        backends = self.available_backends(managers)
        if not backends:
            self.logger.warning("No package managers available to list")
            return Inventory()

        listings: Dict[str, List[InstalledEntry]] = {}
        failures: Dict[str, str] = {}

        workers = max(1, min(self.max_workers, len(backends)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_backend = {
                executor.submit(backend.list_installed): backend
                for backend in backends
            }

            for future in concurrent.futures.as_completed(future_to_backend):
                backend = future_to_backend[future]
                try:
                    listings[backend.name] = future.result()
                    self.logger.debug(
                        f"{backend.name}: {len(listings[backend.name])} installed packages"
                    )
                except Exception as e:
                    self.logger.warning(f"{backend.name}: listing failed - {e}")
                    failures[backend.name] = str(e)

        entries: List[InstalledEntry] = []
        for backend in backends:
            entries.extend(listings.get(backend.name, []))

        return Inventory(
            entries=entries,
            failures=failures,
            managers=[b.name for b in backends],
        )
