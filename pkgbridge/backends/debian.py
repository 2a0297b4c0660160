"""
Debian family package managers: apt and nala.
"""

import re
from typing import List

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines

# Drawing characters nala and bun use to indent detail rows
BOX_CHARS = "├└│─ "


class AptBackend(Backend):
    """apt."""

    name = "apt"
    executable = "apt"
    description = "Debian/Ubuntu based"
    privileged = True

    # "jq/jammy,now 1.6-2.1ubuntu3 amd64 [installed]"
    _installed_line = re.compile(r"^([^/\s]+)/\S+\s+(\S+)\s+\S+\s+\[installed")

    def exists_command(self, pkg: str) -> List[str]:
        return ["apt", "show", pkg]

    def install_command(self, pkg: str) -> List[str]:
        return ["apt", "install", "-y", pkg]

    def list_command(self) -> List[str]:
        return ["apt", "list", "--installed"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        entries = []
        for line in iter_lines(output):
            match = self._installed_line.match(line)
            if match:
                entries.append(self.entry(match.group(1), match.group(2)))
        return entries


class NalaBackend(AptBackend):
    """nala, the apt front-end. Preferred over apt when present."""

    name = "nala"
    executable = "nala"
    description = "Debian/Ubuntu based (apt front-end)"

    def exists_command(self, pkg: str) -> List[str]:
        return ["nala", "show", pkg]

    def install_command(self, pkg: str) -> List[str]:
        return ["nala", "install", "-y", pkg]

    def list_command(self) -> List[str]:
        return ["nala", "list", "--installed"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # jq 1.6-2.1ubuntu3 [Ubuntu/jammy main]
        # └── is installed and automatic
        entries = []
        for line in iter_lines(output):
            if line[0] in BOX_CHARS:
                continue
            parts = line.split()
            if len(parts) < 2 or not parts[1][:1].isdigit():
                continue
            entries.append(self.entry(parts[0], parts[1]))
        return entries
