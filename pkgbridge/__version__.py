"""Version information for pkgbridge."""

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)

# Release information
__license__ = "MIT"
__description__ = "Install and list packages across heterogeneous package managers"
