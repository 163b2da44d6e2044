"""
PhotoScanner - Discovers source photos under a directory tree.
"""

import logging
import os
from typing import List, Optional


class PhotoScanner:
    """
    Recursively lists image files under a root directory.

    Discovery problems are logged and never abort a run: whatever could be
    listed is returned.
    """

    IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png'}

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize scanner.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def scan(self, root: str) -> List[str]:
        """
        List every photo under root.

        Args:
            root: Directory to walk

        Returns:
            Paths of files whose lowercased extension is a recognized
            image extension. Order follows the walk and is not stable
            across filesystems.
        """
        photos = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            dirnames.sort()
            for filename in sorted(filenames):
                if self.is_photo(filename):
                    photos.append(os.path.join(dirpath, filename))

        self.logger.debug(f"Found {len(photos)} photos under {root}")
        return photos

    def list_dirs(self, root: str) -> List[str]:
        """List root and every directory below it."""
        if not os.path.isdir(root):
            self.logger.error(f"Not a directory: {root}")
            return []

        folders = []
        for dirpath, dirnames, _ in os.walk(root, onerror=self._on_walk_error):
            dirnames.sort()
            folders.append(dirpath)
        return folders

    @classmethod
    def is_photo(cls, filename: str) -> bool:
        """True if filename has a recognized image extension."""
        return os.path.splitext(filename)[1].lower() in cls.IMAGE_EXTENSIONS

    def _on_walk_error(self, error: OSError) -> None:
        self.logger.error(f"Cannot scan {error.filename}: {error.strerror or error}")
