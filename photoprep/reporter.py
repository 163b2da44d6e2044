"""
Reporter - Human-readable reports on a category's persisted state.
"""

import logging
import os
import sys
from typing import Optional, TextIO

from .manifest import CategoryIndex, CategoryManifest


class Reporter:
    """
    Reports on a category's manifest and its entry in the category index.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def _format_bytes(self, bytes_val: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} PB"

    def report_summary(self, manifest: CategoryManifest, index: CategoryIndex) -> None:
        """
        Print a summary of a category.

        Lists the photos tracked per run and checks the indexed paths
        against the filesystem: duplicates come from skipped photos being
        re-indexed, missing files from placeholders that were never written
        or from derivatives deleted by hand.
        """
        paths = index.paths(manifest.category)
        unique_paths = list(dict.fromkeys(paths))
        existing = [p for p in unique_paths if os.path.exists(p)]
        missing = len(unique_paths) - len(existing)
        total_bytes = sum(os.path.getsize(p) for p in existing)

        self._print("=" * 60)
        self._print(f"CATEGORY SUMMARY: {manifest.category}")
        self._print("=" * 60)
        self._print()
        self._print(f"  Manifest:          {manifest.path}")
        self._print(f"  Tracked Photos:    {len(manifest):>10,}")
        self._print(f"  Indexed Paths:     {len(paths):>10,}")
        self._print(f"  Duplicate Paths:   {len(paths) - len(unique_paths):>10,}")
        self._print(f"  Missing Files:     {missing:>10,}")
        self._print(f"  Size On Disk:      {self._format_bytes(total_bytes):>10}")
        self._print()

        run_ids = manifest.run_ids
        if run_ids:
            self._print("  Photos By Run:")
            for run_id, count in sorted(run_ids.items(), key=lambda item: (-item[1], item[0])):
                self._print(f"    {run_id:<34} {count:>8,}")
            self._print()
