"""
Parallel inventory collection.
"""

from pkgbridge.parallel.aggregator import Inventory, InventoryAggregator

__all__ = [
    "Inventory",
    "InventoryAggregator",
]
