"""
ResizeStats - Statistics for a resize run.
"""

import time
from dataclasses import dataclass, field
from typing import List


@dataclass
class ResizeStats:
    """
    Statistics for a resize run.

    Attributes:
        run_id: Identity of the run
        discovered: Photos found by the scanner
        processed: Photos (re)generated
        skipped: Photos unchanged since their last run
        errors: Photos that failed
        derivatives_written: Derivative files written
        bytes_written: Total bytes of derivatives written
        start_time: Start timestamp
        error_details: List of error messages
    """
    run_id: str = ''
    discovered: int = 0
    processed: int = 0
    skipped: int = 0
    errors: int = 0
    derivatives_written: int = 0
    bytes_written: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    @property
    def rate_per_minute(self) -> float:
        """Processed photos per minute."""
        if self.elapsed_seconds > 0:
            return self.processed / self.elapsed_seconds * 60
        return 0.0

    @property
    def completed_count(self) -> int:
        """Total completed (processed + skipped + errors)."""
        return self.processed + self.skipped + self.errors

    @property
    def remaining_count(self) -> int:
        """Photos not yet handled."""
        return self.discovered - self.completed_count
