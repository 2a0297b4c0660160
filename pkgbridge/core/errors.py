"""
Exception types.
"""


class PkgBridgeError(Exception):
    """Base class for pkgbridge errors."""


class UnknownBackendError(PkgBridgeError):
    """Raised when a manager name is not in the backend registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown package manager: {name}")


class ListingError(PkgBridgeError):
    """Raised by a backend when its listing command fails."""

    def __init__(self, backend: str, detail: str):
        self.backend = backend
        self.detail = detail
        super().__init__(f"{backend}: listing failed: {detail}")


class AllBackendsExhausted(PkgBridgeError):
    """Raised on request when no candidate backend could provide a package."""

    def __init__(self, outcome):
        self.outcome = outcome
        tried = ", ".join(
            f"{a.backend} ({a.result.value})" for a in outcome.attempts
        ) or "no candidates"
        super().__init__(f"Could not install {outcome.package}: {tried}")
