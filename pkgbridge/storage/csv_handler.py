"""
CSV export of package inventories.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger

from pkgbridge.backends.base import InstalledEntry


class InventoryCSV:
    """Write and read inventory snapshots as CSV."""

    fieldnames = ['collected_at', 'hostname', 'manager', 'name', 'version']

    def __init__(self, csv_file: Path):
        """
        Initialize CSV handler.

        Args:
            csv_file: Path to CSV file
        """
        self.csv_file = csv_file

    def write(
        self,
        entries: Iterable[InstalledEntry],
        hostname: str = "",
        collected_at: Optional[datetime] = None,
    ) -> int:
        """
        Write an inventory snapshot, replacing any previous file.

        Returns:
            Number of rows written
        """
        collected_at = collected_at or datetime.now()
        self.csv_file.parent.mkdir(parents=True, exist_ok=True)

        count = 0
        with open(self.csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            writer.writeheader()
            for entry in entries:
                writer.writerow({
                    'collected_at': collected_at.isoformat(),
                    'hostname': hostname,
                    'manager': entry.manager,
                    'name': entry.name,
                    'version': entry.version or "",
                })
                count += 1

        logger.debug(f"Wrote {count} inventory rows to {self.csv_file}")
        return count

    def read(self) -> List[InstalledEntry]:
        """Read entries back from the CSV file."""
        if not self.csv_file.exists():
            return []

        with open(self.csv_file, 'r', newline='') as f:
            reader = csv.DictReader(f)
            return [
                InstalledEntry(
                    manager=row['manager'],
                    name=row['name'],
                    version=row['version'] or None,
                )
                for row in reader
            ]
