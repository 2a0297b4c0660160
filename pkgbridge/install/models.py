"""
Request and outcome models for package installation.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pkgbridge.core.errors import AllBackendsExhausted


class InstallState(str, Enum):
    """Final state of one ensure call."""

    ALREADY_PRESENT = "already-present"
    INSTALLED = "installed"
    FAILED = "failed"
    BACKEND_UNAVAILABLE = "backend-unavailable"


class AttemptResult(str, Enum):
    """What happened when one backend was tried."""

    BACKEND_UNAVAILABLE = "backend-unavailable"
    ALREADY_PRESENT = "already-present"
    NOT_FOUND = "not-found"
    EXISTENCE_INCONCLUSIVE = "existence-inconclusive"
    INSTALL_FAILED = "install-failed"
    INSTALLED = "installed"


class PackageRequest(BaseModel):
    """A package to ensure, with its alternate and manager-scoped names."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    variants: List[str] = Field(default_factory=list)
    aliases: Dict[str, str] = Field(default_factory=dict)

    def names_for(self, backend: str) -> List[str]:
        """Names to try on ``backend``, in order."""
        if backend in self.aliases:
            return [self.aliases[backend]]
        names = [self.name]
        names.extend(v for v in self.variants if v not in names)
        return names


class BackendAttempt(BaseModel):
    """One backend tried during an ensure call."""

    model_config = ConfigDict(frozen=True)

    backend: str
    package: Optional[str] = None
    result: AttemptResult
    detail: str = ""


class InstallOutcome(BaseModel):
    """Result of ensuring one package."""

    model_config = ConfigDict(frozen=True)

    package: str
    backend: Optional[str] = None
    state: InstallState
    attempts: List[BackendAttempt] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state in (InstallState.ALREADY_PRESENT, InstallState.INSTALLED)

    @property
    def tried(self) -> List[str]:
        """Backends that were available and actually queried."""
        return [
            a.backend for a in self.attempts
            if a.result != AttemptResult.BACKEND_UNAVAILABLE
        ]

    def raise_for_failure(self) -> "InstallOutcome":
        """Raise AllBackendsExhausted unless the package is now present."""
        if not self.ok:
            raise AllBackendsExhausted(self)
        return self
