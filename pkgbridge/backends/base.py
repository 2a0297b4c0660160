"""
Base backend class and models.

A backend wraps one package manager. Each operation is a single call to the
injected command runner; subclasses supply the argument vectors and the
parser for the manager's listing format.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict

from pkgbridge.core.errors import ListingError


class Existence(str, Enum):
    """Answer of an index query."""

    PRESENT = "present"
    ABSENT = "absent"
    INCONCLUSIVE = "inconclusive"  # the query itself errored
    UNSUPPORTED = "unsupported"  # the manager has no index query


class InstalledEntry(BaseModel):
    """One installed package as reported by one manager."""

    model_config = ConfigDict(frozen=True)

    manager: str
    name: str
    version: Optional[str] = None


def iter_lines(output: str) -> Iterator[str]:
    """Yield non-blank lines with trailing whitespace removed."""
    for line in (output or "").splitlines():
        line = line.rstrip()
        if line.strip():
            yield line


class Backend(ABC):
    """Base class for all package-manager backends."""

    name: str = ""
    executable: str = ""
    description: str = ""
    # Install needs elevation (prefixed with the configured sudo command)
    privileged: bool = False
    # Existence decided by exit code alone; otherwise stdout must also match
    strict_exists: bool = True

    def __init__(
        self,
        runner,
        sudo_prefix: Sequence[str] = (),
        timeout: Optional[int] = None,
        install_timeout: Optional[int] = None,
        app_logger=None,
    ):
        self.runner = runner
        self.sudo_prefix = list(sudo_prefix)
        self.timeout = timeout
        self.install_timeout = install_timeout
        self.logger = app_logger or logger

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    # -- argument vectors -------------------------------------------------

    def exists_command(self, pkg: str) -> Optional[List[str]]:
        """Index query for ``pkg``; None when the manager has none."""
        return None

    def installed_command(self, pkg: str) -> Optional[List[str]]:
        """Direct installed-check for ``pkg``; None to scan the listing."""
        return None

    @abstractmethod
    def install_command(self, pkg: str) -> List[str]:
        """Non-interactive install command for ``pkg``."""

    @abstractmethod
    def list_command(self) -> List[str]:
        """Command listing installed packages."""

    @abstractmethod
    def parse_listing(self, output: str) -> List[InstalledEntry]:
        """
        Parse the listing command's output.

        Args:
            output: Raw stdout of ``list_command()``

        Returns:
            Entries in listing order. Headers, footers and malformed lines
            are skipped.
        """

    # -- helpers ------------------------------------------------------------

    def matches_index(self, pkg: str, output: str) -> bool:
        """
        Whether an index query's stdout names ``pkg``.

        Only consulted when ``strict_exists`` is False; those backends must
        override it with a parser for their search output.
        """
        raise NotImplementedError(f"{type(self).__name__} must implement matches_index")

    def normalize_name(self, name: str) -> str:
        return name

    def entry(self, name: str, version: Optional[str] = None) -> InstalledEntry:
        return InstalledEntry(manager=self.name, name=name, version=version or None)

    # -- operations -----------------------------------------------------------

    def exists(self, pkg: str) -> Existence:
        """Query the manager's index for ``pkg``."""
        command = self.exists_command(pkg)
        if command is None:
            return Existence.UNSUPPORTED

        result = self.runner.run(command, timeout=self.timeout)
        if result.errored:
            return Existence.INCONCLUSIVE
        if not result.success:
            return Existence.ABSENT
        if self.strict_exists or self.matches_index(pkg, result.stdout):
            return Existence.PRESENT
        return Existence.ABSENT

    def is_installed(self, pkg: str) -> bool:
        """Check whether ``pkg`` is already installed through this manager."""
        command = self.installed_command(pkg)
        if command is not None:
            result = self.runner.run(command, timeout=self.timeout)
            return result.success and bool(result.stdout.strip())

        try:
            entries = self.list_installed()
        except ListingError as e:
            self.logger.debug(f"{self.name}: installed-check via listing failed: {e}")
            return False
        wanted = self.normalize_name(pkg)
        return any(self.normalize_name(e.name) == wanted for e in entries)

    def install(self, pkg: str) -> bool:
        """Install ``pkg``. Success is exit code 0; there are no retries."""
        command = self.install_command(pkg)
        if self.privileged and self.sudo_prefix:
            command = [*self.sudo_prefix, *command]

        result = self.runner.run(command, timeout=self.install_timeout)
        if not result.success:
            detail = result.stderr.strip().splitlines()[-1:] or [f"exit {result.return_code}"]
            self.logger.warning(f"{self.name}: install of {pkg} failed: {detail[0]}")
        return result.success

    def list_installed(self) -> List[InstalledEntry]:
        """List installed packages. Raises ListingError if the command fails."""
        result = self.runner.run(self.list_command(), timeout=self.timeout)
        if not result.success:
            detail = result.stderr.strip() or f"exit code {result.return_code}"
            raise ListingError(self.name, detail)
        return self.parse_listing(result.stdout)
