"""
Language-specific package managers: cargo, npm, pip, gem, uv, pnpm, bun.

These are not tied to an operating system; the catalog appends them to the
native chain whenever their executable is on the PATH.
"""

import re
from typing import List

from pkgbridge.backends.base import Backend, InstalledEntry, iter_lines
from pkgbridge.backends.debian import BOX_CHARS


class CargoBackend(Backend):
    """Rust (cargo). ``cargo search`` exits 0 without matches."""

    name = "cargo"
    executable = "cargo"
    description = "Rust"
    strict_exists = False

    # "ripgrep v14.1.0:" or "foo v0.1.0 (/home/me/foo):"
    _header = re.compile(r"^(\S+)\s+v(\S+?)(?:\s+\(.*\))?:$")

    def exists_command(self, pkg: str) -> List[str]:
        return ["cargo", "search", "--limit", "1", pkg]

    def matches_index(self, pkg: str, output: str) -> bool:
        # 'ripgrep = "14.1.0"    # ripgrep is a line-oriented search tool'
        prefix = re.compile(r"^" + re.escape(pkg) + r"\s*=")
        return any(prefix.match(line) for line in iter_lines(output))

    def install_command(self, pkg: str) -> List[str]:
        return ["cargo", "install", pkg]

    def list_command(self) -> List[str]:
        return ["cargo", "install", "--list"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        entries = []
        for line in iter_lines(output):
            if line[0].isspace():
                continue  # binary names under a package header
            match = self._header.match(line)
            if match:
                entries.append(self.entry(match.group(1), match.group(2)))
        return entries


class NpmBackend(Backend):
    """Node.js (npm global packages)."""

    name = "npm"
    executable = "npm"
    description = "Node.js (JavaScript)"

    def exists_command(self, pkg: str) -> List[str]:
        return [self.executable, "view", pkg, "name"]

    def install_command(self, pkg: str) -> List[str]:
        return [self.executable, "install", "-g", pkg]

    def list_command(self) -> List[str]:
        return ["npm", "ls", "-g", "--depth=0", "--parseable"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # /usr/local/lib                         <- prefix, skipped
        # /usr/local/lib/node_modules/npm
        # /usr/local/lib/node_modules/@vue/cli
        entries = []
        for line in iter_lines(output):
            path = line.strip().replace("\\", "/")
            marker = path.rfind("node_modules/")
            if marker < 0:
                continue
            name = path[marker + len("node_modules/"):].strip("/")
            if not name or (name.startswith("@") and "/" not in name):
                continue
            entries.append(self.entry(name))
        return entries


class PipBackend(Backend):
    """Python (pip)."""

    name = "pip"
    executable = "pip"
    description = "Python"

    def exists_command(self, pkg: str) -> List[str]:
        return ["pip", "index", "versions", pkg]

    def install_command(self, pkg: str) -> List[str]:
        return ["pip", "install", pkg]

    def list_command(self) -> List[str]:
        return ["pip", "list", "--disable-pip-version-check"]

    def normalize_name(self, name: str) -> str:
        return re.sub(r"[-_.]+", "-", name).lower()

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # Package    Version
        # ---------- -------
        # requests   2.31.0
        #
        # [notice] A new release of pip is available: ...
        entries = []
        for line in iter_lines(output):
            parts = line.split()
            if len(parts) < 2 or line.startswith(("-", "[", "WARNING")):
                continue
            if parts[0] == "Package" and parts[1] == "Version":
                continue
            entries.append(self.entry(parts[0], parts[1]))
        return entries


class GemBackend(Backend):
    """Ruby (gem). ``gem search`` exits 0 without matches."""

    name = "gem"
    executable = "gem"
    description = "Ruby"
    strict_exists = False

    # "rake (13.0.6, 12.3.3)" or "bundler (default: 2.4.10)"
    _gem_line = re.compile(r"^(\S+) \((.+)\)$")

    def exists_command(self, pkg: str) -> List[str]:
        return ["gem", "search", "--exact", "--remote", pkg]

    def matches_index(self, pkg: str, output: str) -> bool:
        for line in iter_lines(output):
            match = self._gem_line.match(line.strip())
            if match and match.group(1) == pkg:
                return True
        return False

    def install_command(self, pkg: str) -> List[str]:
        return ["gem", "install", pkg]

    def list_command(self) -> List[str]:
        return ["gem", "list", "--local"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        entries = []
        for line in iter_lines(output):
            match = self._gem_line.match(line.strip())
            if not match:
                continue
            version = match.group(2).split(",")[0].strip()
            version = version.replace("default:", "").strip()
            entries.append(self.entry(match.group(1), version))
        return entries


class UvBackend(Backend):
    """Python tools via uv. uv has no index query."""

    name = "uv"
    executable = "uv"
    description = "Python tools (uv)"

    _tool_line = re.compile(r"^(\S+)\s+v(\d\S*)")

    def install_command(self, pkg: str) -> List[str]:
        return ["uv", "tool", "install", pkg]

    def list_command(self) -> List[str]:
        return ["uv", "tool", "list"]

    def normalize_name(self, name: str) -> str:
        return re.sub(r"[-_.]+", "-", name).lower()

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # ruff v0.5.0
        # - ruff
        entries = []
        for line in iter_lines(output):
            if line.startswith(("-", " ")):
                continue
            match = self._tool_line.match(line)
            if match:
                entries.append(self.entry(match.group(1), match.group(2)))
        return entries


class PnpmBackend(NpmBackend):
    """Node.js (pnpm global packages)."""

    name = "pnpm"
    executable = "pnpm"
    description = "Node.js (pnpm)"

    def install_command(self, pkg: str) -> List[str]:
        return ["pnpm", "add", "-g", pkg]

    def list_command(self) -> List[str]:
        return ["pnpm", "ls", "-g"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # Legend: production dependency, optional only, dev only
        #
        # /home/me/.local/share/pnpm/global/5
        #
        # dependencies:
        # typescript 5.4.5
        entries = []
        in_dependencies = False
        for line in iter_lines(output):
            stripped = line.strip()
            if stripped.endswith(":") and " " not in stripped:
                in_dependencies = stripped == "dependencies:"
                continue
            if not in_dependencies:
                continue
            parts = stripped.split()
            if len(parts) >= 2 and parts[1][:1].isdigit():
                entries.append(self.entry(parts[0], parts[1]))
        return entries


class BunBackend(Backend):
    """Bun global packages. Bun has no index query."""

    name = "bun"
    executable = "bun"
    description = "Bun (JavaScript)"

    def install_command(self, pkg: str) -> List[str]:
        return ["bun", "add", "-g", pkg]

    def list_command(self) -> List[str]:
        return ["bun", "pm", "ls", "-g"]

    def parse_listing(self, output: str) -> List[InstalledEntry]:
        # /home/me/.bun/install/global node_modules (2)
        # ├── @biomejs/biome@1.8.3
        # └── typescript@5.4.5
        entries = []
        for line in iter_lines(output):
            if line[0] not in BOX_CHARS:
                continue
            spec = line.lstrip(BOX_CHARS)
            name, sep, version = spec.rpartition("@")
            if not sep or not name or not version:
                continue
            entries.append(self.entry(name, version))
        return entries
