"""
Incremental photo derivative pipeline for static galleries.

For each category of photos:
    1. Scan the source tree and fingerprint every photo
    2. Resize changed photos to every configured width (first one watermarked)
    3. Request a placeholder per changed photo
    4. Persist the category manifest and the shared category index

Unchanged photos are skipped, so re-running is cheap and safe.
"""

__version__ = "1.0.0"

from .errors import (
    PhotoprepError,
    PhotoError,
    PhotoReadError,
    PhotoDecodeError,
    ArtifactWriteError,
    WatermarkError,
    PlaceholderError,
    PipelineAborted,
)
from .config import ResizeConfig
from .scanner import PhotoScanner
from .fingerprint import fingerprint
from .resize_engine import ResizeEngine, photo_dimension
from .watermark import WatermarkCompositor
from .artifact_writer import ArtifactWriter
from .placeholder import PlaceholderGenerator, BlurPlaceholderGenerator, NullPlaceholderGenerator
from .manifest import ManifestEntry, CategoryManifest, CategoryIndex
from .resize_stats import ResizeStats
from .resize_progress import ResizeProgress
from .pipeline import Pipeline, resize
from .reporter import Reporter

__all__ = [
    "PhotoprepError",
    "PhotoError",
    "PhotoReadError",
    "PhotoDecodeError",
    "ArtifactWriteError",
    "WatermarkError",
    "PlaceholderError",
    "PipelineAborted",
    "ResizeConfig",
    "PhotoScanner",
    "fingerprint",
    "ResizeEngine",
    "photo_dimension",
    "WatermarkCompositor",
    "ArtifactWriter",
    "PlaceholderGenerator",
    "BlurPlaceholderGenerator",
    "NullPlaceholderGenerator",
    "ManifestEntry",
    "CategoryManifest",
    "CategoryIndex",
    "ResizeStats",
    "ResizeProgress",
    "Pipeline",
    "resize",
    "Reporter",
]
