"""
Package installation across managers.
"""

from pkgbridge.install.catalog import HostCatalog, NATIVE_CHAINS, UNIVERSAL_MANAGERS
from pkgbridge.install.models import (
    AttemptResult,
    BackendAttempt,
    InstallOutcome,
    InstallState,
    PackageRequest,
)
from pkgbridge.install.orchestrator import InstallOrchestrator

__all__ = [
    "HostCatalog",
    "NATIVE_CHAINS",
    "UNIVERSAL_MANAGERS",
    "AttemptResult",
    "BackendAttempt",
    "InstallOutcome",
    "InstallState",
    "PackageRequest",
    "InstallOrchestrator",
]
