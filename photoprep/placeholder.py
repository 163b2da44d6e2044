"""
Placeholder generators - Low-quality vector stand-ins shown while a photo loads.

The pipeline treats placeholder generation as a pluggable collaborator: it
calls generate() once per processed photo and records the path from
naming.placeholder_path(), without checking that the file exists.
"""

import base64
import io
import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image, ImageFilter

from .errors import PhotoDecodeError, PlaceholderError
from .naming import placeholder_path
from .resize_engine import ResizeEngine

SVG_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" '
    'width="{width}" height="{height}" viewBox="0 0 {width} {height}">'
    '<filter id="b"><feGaussianBlur stdDeviation="{blur}"/></filter>'
    '<image filter="url(#b)" width="{width}" height="{height}" '
    'preserveAspectRatio="none" href="data:image/jpeg;base64,{data}"/>'
    '</svg>\n'
)


class PlaceholderGenerator(ABC):
    """Produces one placeholder file per source photo, or none."""

    @abstractmethod
    def generate(self, run_id: str, source_path: str, author: str, category: str) -> None:
        """
        Produce the placeholder for source_path.

        Args:
            run_id: Identity of the current run
            source_path: Source photo
            author: Author name used in the output file name
            category: Slugified category
        """


class NullPlaceholderGenerator(PlaceholderGenerator):
    """Produces nothing; for runs that do not need placeholders."""

    def generate(self, run_id: str, source_path: str, author: str, category: str) -> None:
        return None


class BlurPlaceholderGenerator(PlaceholderGenerator):
    """
    Writes an SVG wrapping a tiny, blurred JPEG preview of the photo.

    The SVG keeps the source's dimensions so it reserves the right space
    in a layout.
    """

    def __init__(
        self,
        root: str,
        preview_width: int = 32,
        blur: int = 12,
        quality: int = 40,
        resize_engine: Optional[ResizeEngine] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize placeholder generator.

        Args:
            root: Output root (same root the derivatives use)
            preview_width: Width of the embedded preview in pixels
            blur: Standard deviation of the SVG blur filter
            quality: JPEG quality of the embedded preview
            resize_engine: Decoder for source photos (default: ResizeEngine)
            logger: Optional logger instance
        """
        self.root = root
        self.preview_width = preview_width
        self.blur = blur
        self.quality = quality
        self.logger = logger or logging.getLogger(__name__)
        self.engine = resize_engine or ResizeEngine(logger=self.logger)

    def generate(self, run_id: str, source_path: str, author: str, category: str) -> None:
        destination = placeholder_path(self.root, run_id, category, source_path, author)
        svg = self.render(source_path)

        tmp_path = destination + '.tmp'
        try:
            os.makedirs(os.path.dirname(destination), mode=0o755, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                f.write(svg)
            os.replace(tmp_path, destination)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PlaceholderError(f"Cannot write placeholder {destination}: {e}") from e

        self.logger.debug(f"Wrote placeholder {destination}")

    def render(self, source_path: str) -> str:
        """Render the placeholder SVG document for source_path."""
        try:
            preview = self.engine.open(source_path)
        except PhotoDecodeError as e:
            raise PlaceholderError(f"Cannot read {source_path}: {e}") from e
        width, height = preview.size

        preview_height = max(1, round(height * self.preview_width / width))
        preview = preview.resize((self.preview_width, preview_height), Image.Resampling.LANCZOS)
        preview = preview.filter(ImageFilter.GaussianBlur(1))

        buffer = io.BytesIO()
        preview.save(buffer, format='JPEG', quality=self.quality)
        data = base64.b64encode(buffer.getvalue()).decode('ascii')

        return SVG_TEMPLATE.format(width=width, height=height, blur=self.blur, data=data)
