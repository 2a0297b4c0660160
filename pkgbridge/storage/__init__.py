"""
Storage and logging components.
"""

from pkgbridge.storage.logger import setup_logging
from pkgbridge.storage.csv_handler import InventoryCSV

__all__ = [
    "setup_logging",
    "InventoryCSV",
]
