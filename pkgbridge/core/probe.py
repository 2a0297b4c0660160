"""
Command availability probe.
"""

import shutil
import threading
from typing import Callable, Dict, Optional


class CommandProbe:
    """Answer whether an executable exists on the host PATH.

    Each distinct name is looked up once; later calls are served from the
    cache until ``clear()`` is called.
    """

    def __init__(self, which: Callable[[str], Optional[str]] = shutil.which):
        self._which = which
        self._cache: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def available(self, name: str) -> bool:
        """Check if a command is available. Never raises."""
        with self._lock:
            if name in self._cache:
                return self._cache[name]
            try:
                found = self._which(name) is not None
            except (OSError, ValueError):
                found = False
            self._cache[name] = found
            return found

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
