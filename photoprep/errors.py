"""
Exceptions raised by the photoprep pipeline.
"""

from typing import Optional


class PhotoprepError(Exception):
    """Base class for all photoprep errors."""


class PhotoError(PhotoprepError):
    """
    An error tied to a single source photo.

    Attributes:
        path: Source photo the error relates to
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class PhotoReadError(PhotoError):
    """Source photo could not be read from disk."""


class PhotoDecodeError(PhotoError):
    """Source photo is corrupt or in an unsupported format."""


class ArtifactWriteError(PhotoError):
    """A derivative could not be written (directory creation or encoding)."""


class WatermarkError(PhotoprepError):
    """Watermark image is missing or cannot be decoded."""


class PipelineAborted(PhotoprepError):
    """Run abandoned after a photo failed under the 'abort' error policy."""


class PlaceholderError(PhotoprepError):
    """Placeholder could not be produced for a photo."""
