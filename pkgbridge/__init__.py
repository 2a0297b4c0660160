"""
pkgbridge - one interface to many package managers.
"""

from pkgbridge.__version__ import __version__
from pkgbridge.core.config import AppConfig
from pkgbridge.core.detector import HostContext, HostDetector
from pkgbridge.core.probe import CommandProbe
from pkgbridge.install.models import InstallOutcome, InstallState, PackageRequest
from pkgbridge.install.orchestrator import InstallOrchestrator
from pkgbridge.parallel.aggregator import Inventory, InventoryAggregator

__all__ = [
    "AppConfig",
    "HostContext",
    "HostDetector",
    "CommandProbe",
    "InstallOutcome",
    "InstallState",
    "PackageRequest",
    "InstallOrchestrator",
    "Inventory",
    "InventoryAggregator",
    "__version__",
]
