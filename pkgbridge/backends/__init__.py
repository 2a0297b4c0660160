"""
Package-manager backends.
"""

from pkgbridge.backends.base import Backend, Existence, InstalledEntry
from pkgbridge.backends.registry import BACKENDS, build_backends, resolve_name

__all__ = [
    "Backend",
    "Existence",
    "InstalledEntry",
    "BACKENDS",
    "build_backends",
    "resolve_name",
]
