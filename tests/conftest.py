"""Shared fixtures: a scripted command runner and probe standing in for the host."""
from typing import Dict, Iterable, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from pkgbridge.backends.base import Existence
from pkgbridge.backends.registry import build_backends
from pkgbridge.core.config import AppConfig
from pkgbridge.core.detector import HostContext
from pkgbridge.core.executor import CommandResult


class FakeRunner:
    """Records every argv and answers with scripted (exit code, stdout, stderr).

    Commands are matched on their space-joined argv. Anything unscripted
    exits 1 with no output.
    """

    def __init__(self):
        self.responses: Dict[str, Tuple[int, str, str]] = {}
        self.calls: List[str] = []

    def script(self, command: str, return_code: int = 0, stdout: str = "", stderr: str = ""):
        self.responses[command] = (return_code, stdout, stderr)
        return self

    def run(self, command, timeout: Optional[int] = None) -> CommandResult:
        cmd = " ".join(command)
        self.calls.append(cmd)
        return_code, stdout, stderr = self.responses.get(cmd, (1, "", ""))
        return CommandResult(
            command=cmd,
            return_code=return_code,
            stdout=stdout,
            stderr=stderr,
            duration=0.0,
            success=return_code == 0,
        )

    def calls_for(self, executable: str) -> List[str]:
        return [c for c in self.calls if c.split()[0] == executable]


class StaticProbe:
    """Probe answering from a fixed set of executable names."""

    def __init__(self, available: Iterable[str] = ()):
        self.names = set(available)
        self.calls: List[str] = []

    def available(self, name: str) -> bool:
        self.calls.append(name)
        return name in self.names


class FakeBackend:
    """Backend stand-in driven by sets of package names; logs every call."""

    def __init__(
        self,
        name: str,
        log: List[str],
        existing: Iterable[str] = (),
        installed: Iterable[str] = (),
        install_ok: bool = True,
        existence: Optional[Existence] = None,
    ):
        self.name = name
        self.executable = name
        self.description = f"fake {name}"
        self.log = log
        self.existing = set(existing)
        self.installed = set(installed)
        self.install_ok = install_ok
        self.existence = existence

    def is_installed(self, pkg: str) -> bool:
        self.log.append(f"{self.name}:installed:{pkg}")
        return pkg in self.installed

    def exists(self, pkg: str) -> Existence:
        self.log.append(f"{self.name}:exists:{pkg}")
        if self.existence is not None:
            return self.existence
        return Existence.PRESENT if pkg in self.existing else Existence.ABSENT

    def install(self, pkg: str) -> bool:
        self.log.append(f"{self.name}:install:{pkg}")
        return self.install_ok


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def config(tmp_path):
    return AppConfig(log_dir=tmp_path / "logs")


@pytest.fixture
def backends(runner, config, mock_logger):
    """Real backends wired to the scripted runner, with no elevation."""
    return build_backends(runner, config, mock_logger)


@pytest.fixture
def macos_host():
    return HostContext(os_type="Darwin", platform="macOS-14.0", hostname="testhost")


@pytest.fixture
def debian_host():
    return HostContext(
        os_type="Linux",
        distro="Debian GNU/Linux/12",
        family="debian",
        platform="Linux-6.1",
        hostname="testhost",
    )


def make_host(os_type: str = "Linux", family: Optional[str] = None, preferences=()) -> HostContext:
    return HostContext(
        os_type=os_type,
        family=family,
        distro=f"{family}/1" if family else None,
        hostname="testhost",
        preferences=tuple(preferences),
    )


@pytest.fixture
def host_factory():
    return make_host


@pytest.fixture
def probe_factory():
    return StaticProbe


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def fake_backend(call_log):
    """Factory for FakeBackends sharing one call log."""
    def _make(name: str, **kwargs) -> FakeBackend:
        return FakeBackend(name, call_log, **kwargs)
    return _make
