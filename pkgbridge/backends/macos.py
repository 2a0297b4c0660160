"""
macOS package managers: Homebrew, MacPorts, Fink.
"""

import re
from typing import List

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines


class BrewBackend(Backend):
    """Homebrew."""

    name = "brew"
    executable = "brew"
    description = "Homebrew (macOS/Linux)"

    def exists_command(self, pkg: str) -> List[str]:
        return ["brew", "info", pkg]

    def installed_command(self, pkg: str) -> List[str]:
        return ["brew", "list", "--versions", pkg]

    def install_command(self, pkg: str) -> List[str]:
        return ["brew", "install", pkg]

    def list_command(self) -> List[str]:
        return ["brew", "list", "--versions"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # "jq 1.7.1" or "python@3.12 3.12.1 3.12.2" (newest last)
        entries = []
        for line in iter_lines(output):
            parts = line.split()
            if len(parts) < 2 or line.startswith((" ", "\t")) or parts[0].endswith(":"):
                continue
            entries.append(self.entry(parts[0], parts[-1]))
        return entries


class PortBackend(Backend):
    """MacPorts."""

    name = "port"
    executable = "port"
    description = "MacPorts"
    privileged = True
    strict_exists = False

    _installed_line = re.compile(r"^\s+(\S+)\s+@(\S+)")

    def exists_command(self, pkg: str) -> List[str]:
        return ["port", "search", "--exact", pkg]

    def matches_index(self, pkg: str, output: str) -> bool:
        # "jq @1.7.1 (sysutils)"
        return any(line.split()[0] == pkg for line in iter_lines(output))

    def install_command(self, pkg: str) -> List[str]:
        return ["port", "-N", "install", pkg]

    def list_command(self) -> List[str]:
        return ["port", "installed"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # The following ports are currently installed:
        #   jq @1.7.1_0 (active)
        entries = []
        for line in iter_lines(output):
            match = self._installed_line.match(line)
            if match:
                entries.append(self.entry(match.group(1), match.group(2)))
        return entries


class FinkBackend(Backend):
    """Fink."""

    name = "fink"
    executable = "fink"
    description = "Fink (legacy macOS)"
    privileged = True
    strict_exists = False

    def exists_command(self, pkg: str) -> List[str]:
        return ["fink", "list", "--tab", pkg]

    def matches_index(self, pkg: str, output: str) -> bool:
        return any(row[1] == pkg for row in self._rows(output))

    def install_command(self, pkg: str) -> List[str]:
        return ["fink", "--yes", "install", pkg]

    def list_command(self) -> List[str]:
        return ["fink", "list", "--installed", "--tab"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # "i\tjq\t1.6-1\tJSON processor" (status, name, version, description)
        return [self.entry(row[1], row[2]) for row in self._rows(output)]

    @staticmethod
    def _rows(output: str) -> List[List[str]]:
        rows = []
        for line in iter_lines(output):
            fields = [f.strip() for f in line.split("\t")]
            if len(fields) >= 3 and fields[1] and fields[2]:
                rows.append(fields)
        return rows
