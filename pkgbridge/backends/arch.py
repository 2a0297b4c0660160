"""
Arch family package managers: pacman and the AUR helpers yay and paru.
"""

from typing import List

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines


class PacmanBackend(Backend):
    """pacman."""

    name = "pacman"
    executable = "pacman"
    description = "Arch Linux based"
    privileged = True

    def exists_command(self, pkg: str) -> List[str]:
        return [self.executable, "-Si", pkg]

    def installed_command(self, pkg: str) -> List[str]:
        return [self.executable, "-Q", pkg]

    def install_command(self, pkg: str) -> List[str]:
        return [self.executable, "-S", "--noconfirm", pkg]

    def list_command(self) -> List[str]:
        return [self.executable, "-Q"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # "jq 1.7.1-1"
        entries = []
        for line in iter_lines(output):
            parts = line.split()
            if len(parts) != 2 or parts[0].endswith(":"):
                continue
            entries.append(self.entry(parts[0], parts[1]))
        return entries


class YayBackend(PacmanBackend):
    """yay. Also resolves AUR packages; elevates by itself."""

    name = "yay"
    executable = "yay"
    description = "Arch User Repository helper"
    privileged = False


class ParuBackend(PacmanBackend):
    """paru. Also resolves AUR packages; elevates by itself."""

    name = "paru"
    executable = "paru"
    description = "Arch User Repository helper"
    privileged = False
