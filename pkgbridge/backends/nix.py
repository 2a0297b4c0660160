"""
Nix package manager (nix-env).
"""

import re
from typing import List

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines

# "ripgrep-14.1.0" -> ("ripgrep", "14.1.0"); the version starts at the first
# dash followed by a digit
NIX_NAME = re.compile(r"^(.+?)-(\d\S*)$")


class NixBackend(Backend):
    """nix-env. ``-qa`` can exit 0 without a match, so stdout is checked."""

    name = "nix-env"
    executable = "nix-env"
    description = "Nix package manager"
    strict_exists = False

    def exists_command(self, pkg: str) -> List[str]:
        return ["nix-env", "-qa", pkg]

    def matches_index(self, pkg: str, output: str) -> bool:
        return any(self._split(line.strip())[0] == pkg for line in iter_lines(output))

    def install_command(self, pkg: str) -> List[str]:
        attr = pkg if pkg.startswith("nixpkgs.") else f"nixpkgs.{pkg}"
        return ["nix-env", "-iA", attr]

    def list_command(self) -> List[str]:
        return ["nix-env", "-q"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        entries = []
        for line in iter_lines(output):
            line = line.strip()
            if " " in line or line.startswith(("warning:", "error:")):
                continue
            name, version = self._split(line)
            entries.append(self.entry(name, version))
        return entries

    @staticmethod
    def _split(token: str):
        match = NIX_NAME.match(token)
        if match:
            return match.group(1), match.group(2)
        return token, None
