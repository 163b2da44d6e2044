"""
WatermarkCompositor - Stamps a watermark onto the bottom-left of derivatives.
"""

import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .errors import WatermarkError


class WatermarkCompositor:
    """
    Composites a watermark over a derivative, anchored bottom-left.

    The mark is never scaled: its left edge meets the derivative's left
    edge and its bottom edge meets the derivative's bottom edge. Blending
    follows the mark's own alpha channel.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def load(self, path: str) -> Image.Image:
        """
        Load the watermark once for a whole run.

        Raises:
            WatermarkError: If the file is missing or not an image
        """
        try:
            with Image.open(path) as mark:
                mark.load()
                return mark.convert('RGBA')
        except (UnidentifiedImageError, OSError) as e:
            self.logger.error(f"Cannot load watermark {path}: {e}")
            raise WatermarkError(f"Cannot load watermark {path}: {e}") from e

    def composite(self, base: Image.Image, mark: Image.Image) -> Image.Image:
        """
        Overlay mark onto a copy of base.

        Args:
            base: Derivative image (not modified)
            mark: Watermark image (not modified)

        Returns:
            New image with the mark's top-left corner at (0, H - h)
        """
        if mark.mode != 'RGBA':
            mark = mark.convert('RGBA')

        out = base.copy()
        x, y = 0, base.height - mark.height
        if out.mode == 'RGBA':
            # alpha_composite rejects offsets outside the base
            if y < 0:
                mark = mark.crop((0, -y, mark.width, mark.height))
                y = 0
            out.alpha_composite(mark, dest=(x, y))
        else:
            out.paste(mark, (x, y), mark)
        return out
