"""
Host and distribution detection.
"""

import platform
import socket
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Keyword (matched against lower-cased distro identifiers) -> family
FAMILY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    ("debian", ("debian", "ubuntu", "mint", "pop", "raspbian", "kali")),
    ("redhat", ("fedora", "rhel", "red hat", "centos", "rocky", "alma")),
    ("arch", ("arch", "manjaro", "endeavouros", "endeavour")),
    ("alpine", ("alpine",)),
]


class HostContext(BaseModel):
    """What the host is and which managers the caller prefers."""

    model_config = ConfigDict(frozen=True)

    os_type: str  # 'Linux', 'Darwin', 'Windows'
    distro: Optional[str] = None  # "Name/version", Linux only
    family: Optional[str] = None  # 'debian', 'redhat', 'arch', 'alpine'
    platform: str = ""
    hostname: str = ""
    preferences: Tuple[str, ...] = Field(default_factory=tuple)

    @property
    def is_macos(self) -> bool:
        return self.os_type == "Darwin"

    @property
    def is_linux(self) -> bool:
        return self.os_type == "Linux"


def _read_key_values(path: Path) -> Dict[str, str]:
    """Parse a KEY=value file such as /etc/os-release."""
    values: Dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return values
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def classify_family(*identifiers: Optional[str]) -> Optional[str]:
    """Map distro names/ids (e.g. 'ubuntu', 'Rocky Linux') to a family."""
    haystack = " ".join(i.lower() for i in identifiers if i)
    if not haystack:
        return None
    for family, keywords in FAMILY_KEYWORDS:
        if any(k in haystack for k in keywords):
            return family
    return None


class HostDetector:
    """Detect operating system, distribution and family."""

    def __init__(self, etc_dir: Path = Path("/etc")):
        self.etc_dir = etc_dir

    def detect(
        self,
        preferences: Sequence[str] = (),
        os_type: Optional[str] = None,
    ) -> HostContext:
        """Detect current host information."""
        os_type = os_type or platform.system()
        distro = None
        family = None
        if os_type == "Linux":
            distro, family = self.detect_distro()

        return HostContext(
            os_type=os_type,
            distro=distro,
            family=family,
            platform=platform.platform(),
            hostname=socket.gethostname(),
            preferences=tuple(preferences),
        )

    def detect_distro(self) -> Tuple[str, Optional[str]]:
        """
        Detect the Linux distribution.

        Returns:
            ("Name/version", family) where version may be "unknown" and
            family may be None for unrecognized distributions.
        """
        os_release = _read_key_values(self.etc_dir / "os-release")
        name = os_release.get("NAME")
        if name:
            version = os_release.get("VERSION_ID") or "unknown"
            family = classify_family(
                os_release.get("ID"), os_release.get("ID_LIKE"), name
            )
            return f"{name}/{version}", family

        lsb = _read_key_values(self.etc_dir / "lsb-release")
        dist_id = lsb.get("DISTRIB_ID")
        if dist_id:
            version = lsb.get("DISTRIB_RELEASE") or "unknown"
            return f"{dist_id}/{version}", classify_family(dist_id)

        debian_version = self._read_first_line("debian_version")
        if debian_version is not None:
            return f"Debian/{debian_version or 'unknown'}", "debian"

        redhat = self._read_first_line("redhat-release")
        if redhat is not None:
            # "Rocky Linux release 9.3 (Blue Onyx)"
            name, _, rest = redhat.partition(" release ")
            version = rest.split()[0] if rest.split() else "unknown"
            return f"{name or 'Red Hat'}/{version}", "redhat"

        alpine = self._read_first_line("alpine-release")
        if alpine is not None:
            return f"Alpine/{alpine or 'unknown'}", "alpine"

        if (self.etc_dir / "arch-release").exists():
            return "Arch Linux/unknown", "arch"

        return "unknown/unknown", None

    def _read_first_line(self, filename: str) -> Optional[str]:
        path = self.etc_dir / filename
        if not path.exists():
            return None
        try:
            lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError:
            return None
        return lines[0].strip() if lines else ""
