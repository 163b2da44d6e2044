"""
ResizeProgress - Tracks and displays resize progress.
"""

import logging
import os
from typing import Optional

from .resize_stats import ResizeStats


class ResizeProgress:
    """
    Tracks and displays resize progress with optional per-photo output.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 50,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each photo as it's handled
            log_interval: Log summary progress every N photos (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.last_logged = 0

    def on_photo_processed(
        self,
        path: str,
        success: bool,
        derivatives: int = 0,
        error: Optional[str] = None
    ) -> None:
        """
        Called when a photo has been processed or has failed.

        Args:
            path: Source photo
            success: Whether all derivatives were written
            derivatives: Number of derivatives written
            error: Error message (if failed)
        """
        if not self.show_files:
            return
        name = os.path.basename(path)
        if success:
            print(f"  [OK] {name} -> {derivatives} derivatives")
        else:
            print(f"  [ERROR] {name} -> {error or 'failed'}")

    def on_photo_skipped(self, path: str, reason: str) -> None:
        """Called when a photo is unchanged since its last run."""
        if self.show_files:
            print(f"  [SKIP] {os.path.basename(path)} -> {reason}")

    def on_dry_run(self, path: str) -> None:
        """Called in dry-run mode."""
        if self.show_files:
            print(f"  [DRY RUN] {os.path.basename(path)} -> would generate derivatives")

    def on_progress_update(self, stats: ResizeStats) -> None:
        """
        Called after each photo to report overall progress.

        Args:
            stats: Current run statistics
        """
        total_done = stats.completed_count

        if not self.show_files and total_done - self.last_logged >= self.log_interval:
            self.last_logged = total_done
            self.logger.info(
                f"Progress: {stats.processed} processed, {stats.skipped} skipped, "
                f"{stats.errors} errors ({stats.remaining_count} left)"
            )

    def __call__(self, stats: ResizeStats) -> None:
        """Allow use as callback for stats updates."""
        self.on_progress_update(stats)
