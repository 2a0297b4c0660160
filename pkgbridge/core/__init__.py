"""
Core functionality components.
"""

from pkgbridge.core.config import AppConfig, EnvSettings
from pkgbridge.core.detector import HostContext, HostDetector
from pkgbridge.core.executor import CommandResult, CommandRunner
from pkgbridge.core.probe import CommandProbe

__all__ = [
    "AppConfig",
    "EnvSettings",
    "HostContext",
    "HostDetector",
    "CommandResult",
    "CommandRunner",
    "CommandProbe",
]
