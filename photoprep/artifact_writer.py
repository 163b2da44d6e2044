"""
ArtifactWriter - Persists derivatives as JPEG files.
"""

import logging
import os
from typing import Optional

from PIL import Image

from .errors import ArtifactWriteError

DIR_MODE = 0o755


class ArtifactWriter:
    """
    Writes derivative images to their deterministic output paths.
    """

    def __init__(self, quality: int = 85, logger: Optional[logging.Logger] = None):
        """
        Initialize writer.

        Args:
            quality: JPEG quality for output (default: 85)
            logger: Optional logger instance
        """
        self.quality = quality
        self.logger = logger or logging.getLogger(__name__)

    def write(self, img: Image.Image, destination: str) -> int:
        """
        Encode img as JPEG at destination, creating parent directories.

        Args:
            img: Image to encode
            destination: Output file path

        Returns:
            Number of bytes written

        Raises:
            ArtifactWriteError: If a directory cannot be created or the
                image cannot be encoded
        """
        parent = os.path.dirname(destination)
        try:
            if parent:
                os.makedirs(parent, mode=DIR_MODE, exist_ok=True)
            if img.mode != 'RGB':
                img = img.convert('RGB')
            img.save(destination, format='JPEG', quality=self.quality, optimize=True)
        except (OSError, ValueError) as e:
            self.logger.error(f"Cannot write {destination}: {e}")
            raise ArtifactWriteError(f"Cannot write {destination}: {e}", path=destination) from e

        size = os.path.getsize(destination)
        self.logger.debug(f"Wrote {destination} ({size} bytes)")
        return size
