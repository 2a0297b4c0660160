"""
Static registry of backends keyed by manager name.
"""

from typing import Dict, Type

from pkgbridge.backends.alpine import ApkBackend
from pkgbridge.backends.arch import PacmanBackend, ParuBackend, YayBackend
from pkgbridge.backends.base import Backend
from pkgbridge.backends.debian import AptBackend, NalaBackend
from pkgbridge.backends.languages import (
    BunBackend,
    CargoBackend,
    GemBackend,
    NpmBackend,
    PipBackend,
    PnpmBackend,
    UvBackend,
)
from pkgbridge.backends.macos import BrewBackend, FinkBackend, PortBackend
from pkgbridge.backends.nix import NixBackend
from pkgbridge.backends.redhat import DnfBackend, YumBackend
from pkgbridge.core.config import AppConfig
from pkgbridge.core.errors import UnknownBackendError

BACKENDS: Dict[str, Type[Backend]] = {
    cls.name: cls
    for cls in (
        BrewBackend,
        PortBackend,
        FinkBackend,
        NalaBackend,
        AptBackend,
        DnfBackend,
        YumBackend,
        YayBackend,
        ParuBackend,
        PacmanBackend,
        ApkBackend,
        CargoBackend,
        NpmBackend,
        PipBackend,
        GemBackend,
        UvBackend,
        PnpmBackend,
        BunBackend,
        NixBackend,
    )
}

ALIASES: Dict[str, str] = {
    "nix": "nix-env",
    "homebrew": "brew",
    "macports": "port",
    "apt-get": "apt",
    "pip3": "pip",
    "rust": "cargo",
}


def resolve_name(name: str) -> str:
    """Map a manager name or alias to its registry key."""
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    if key not in BACKENDS:
        raise UnknownBackendError(name)
    return key


def build_backends(runner, config: AppConfig, app_logger=None) -> Dict[str, Backend]:
    """Create one backend instance per registered manager, in registry order."""
    return {
        name: cls(
            runner,
            sudo_prefix=config.sudo_prefix,
            timeout=config.timeout,
            install_timeout=config.install_timeout,
            app_logger=app_logger,
        )
        for name, cls in BACKENDS.items()
    }
