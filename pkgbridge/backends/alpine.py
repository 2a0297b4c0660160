"""
Alpine package manager: apk.
"""

import re
from typing import List

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines

# "busybox-1.36.1-r15" -> ("busybox", "1.36.1-r15")
APK_PACKAGE = re.compile(r"^(.+?)-(\d[^-\s]*-r\d+)$")


class ApkBackend(Backend):
    """apk. ``apk search`` exits 0 without matches, so stdout is checked."""

    name = "apk"
    executable = "apk"
    description = "Alpine Linux"
    privileged = True
    strict_exists = False

    def exists_command(self, pkg: str) -> List[str]:
        return ["apk", "search", "-e", pkg]

    def matches_index(self, pkg: str, output: str) -> bool:
        for line in iter_lines(output):
            match = APK_PACKAGE.match(line.strip())
            if (match.group(1) if match else line.strip()) == pkg:
                return True
        return False

    def install_command(self, pkg: str) -> List[str]:
        return ["apk", "add", pkg]

    def list_command(self) -> List[str]:
        return ["apk", "info", "-v"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        entries = []
        for line in iter_lines(output):
            match = APK_PACKAGE.match(line.strip())
            if match:
                entries.append(self.entry(match.group(1), match.group(2)))
        return entries
