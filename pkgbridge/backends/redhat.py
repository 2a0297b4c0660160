"""
RHEL family package managers: dnf and yum.
"""

from typing import List, Optional

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines

SKIP_PREFIXES = (
    "Installed Packages",
    "Installed packages",
    "Last metadata expiration",
    "Updating Subscription",
    "Loaded plugins",
    "Loading mirror",
    "Repository ",
)


class DnfBackend(Backend):
    """dnf. Preferred over yum when present."""

    name = "dnf"
    executable = "dnf"
    description = "Modern RHEL/Fedora/CentOS"
    privileged = True

    def exists_command(self, pkg: str) -> List[str]:
        return [self.executable, "info", pkg]

    def installed_command(self, pkg: str) -> List[str]:
        return [self.executable, "list", "installed", pkg]

    def install_command(self, pkg: str) -> List[str]:
        return [self.executable, "install", "-y", pkg]

    def list_command(self) -> List[str]:
        return [self.executable, "list", "installed"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        """
        Parse ``list installed`` output.

        Rows are ``name.arch  version  repo``. When ``name.arch`` is too long
        for its column it is printed alone and the rest wraps to the next line.
        """
        entries = []
        pending: Optional[str] = None
        for line in iter_lines(output):
            if line.startswith(SKIP_PREFIXES):
                pending = None
                continue
            parts = line.split()
            if pending is not None and line[0].isspace() and len(parts) >= 2:
                parts = [pending, *parts]
            pending = None

            if len(parts) == 1 and "." in parts[0]:
                pending = parts[0]
                continue
            if len(parts) < 2 or "." not in parts[0] or not parts[1][:1].isdigit():
                continue
            name = parts[0].rsplit(".", 1)[0]
            entries.append(self.entry(name, parts[1]))
        return entries


class YumBackend(DnfBackend):
    """yum."""

    name = "yum"
    executable = "yum"
    description = "Older RHEL/Fedora/CentOS"
