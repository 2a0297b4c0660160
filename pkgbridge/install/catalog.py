"""
Host manager catalog: which backends to try, in which order.
"""

from typing import Dict, List, Mapping

from loguru import logger

from pkgbridge.backends.base import Backend
from pkgbridge.backends.registry import resolve_name
from pkgbridge.core.detector import HostContext
from pkgbridge.core.errors import UnknownBackendError

# OS-native chains, most preferred first
NATIVE_CHAINS: Dict[str, List[str]] = {
    "darwin": ["brew", "port", "fink"],
    "debian": ["nala", "apt"],
    "redhat": ["dnf", "yum"],
    "arch": ["yay", "paru", "pacman"],
    "alpine": ["apk"],
}

# Appended after the native chain whenever the executable is present
UNIVERSAL_MANAGERS: List[str] = ["cargo", "npm", "pip", "gem", "uv", "pnpm", "bun", "nix-env"]


class HostCatalog:
    """Map a host context to an ordered list of candidate backends."""

    def __init__(self, backends: Mapping[str, Backend], probe, app_logger=None):
        self.backends = backends
        self.probe = probe
        self.logger = app_logger or logger

    def native_chain(self, host: HostContext) -> List[str]:
        """Names of the OS-native managers for ``host``."""
        if host.is_macos:
            return list(NATIVE_CHAINS["darwin"])
        if host.is_linux and host.family in NATIVE_CHAINS:
            return list(NATIVE_CHAINS[host.family])
        return []

    def candidate_names(self, host: HostContext) -> List[str]:
        """
        Ordered candidate names for ``host``.

        The native chain is returned whole; universal managers only when
        their executable is available. Host preferences are moved to the front.
        """
        native = self.native_chain(host)
        if not native:
            self.logger.warning(
                f"No native package manager chain for {host.os_type}"
                + (f" ({host.distro})" if host.distro else "")
            )

        names = [n for n in native if n in self.backends]
        for name in UNIVERSAL_MANAGERS:
            backend = self.backends.get(name)
            if backend is not None and name not in names and self.probe.available(backend.executable):
                names.append(name)

        preferred: List[str] = []
        for raw in host.preferences:
            try:
                name = resolve_name(raw)
            except UnknownBackendError:
                self.logger.warning(f"Ignoring unknown preferred manager: {raw}")
                continue
            if name in preferred or name not in self.backends:
                continue
            if name in names or self.probe.available(self.backends[name].executable):
                preferred.append(name)

        return preferred + [n for n in names if n not in preferred]

    def candidates_for(self, host: HostContext) -> List[Backend]:
        """Ordered candidate backends for ``host``."""
        return [self.backends[name] for name in self.candidate_names(host)]
