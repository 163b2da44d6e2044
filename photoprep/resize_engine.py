"""
ResizeEngine - Decodes source photos and scales them to target widths.
"""

import logging
from typing import Optional, Tuple

from PIL import Image

from .errors import PhotoDecodeError


class ResizeEngine:
    """
    Produces width-targeted derivatives from source photos using Pillow.

    Scaling is uniform: the height follows the source aspect ratio and
    nothing is ever cropped. Upscaling is allowed.
    """

    def __init__(
        self,
        resample: Image.Resampling = Image.Resampling.LANCZOS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resize engine.

        Args:
            resample: Resampling filter (default: Lanczos)
            logger: Optional logger instance
        """
        self.resample = resample
        self.logger = logger or logging.getLogger(__name__)

    def open(self, path: str) -> Image.Image:
        """
        Decode a source photo into a JPEG-compatible RGB image.

        Args:
            path: Source photo path

        Returns:
            Fully loaded RGB image

        Raises:
            PhotoDecodeError: If the file is corrupt or not an image
        """
        try:
            with Image.open(path) as img:
                img.load()
                return self._convert_color_mode(img)
        except Exception as e:
            self.logger.error(f"Cannot decode {path}: {e}")
            raise PhotoDecodeError(f"Cannot decode {path}: {e}", path=path) from e

    def resize(self, img: Image.Image, width: int) -> Image.Image:
        """
        Scale img to width, deriving the height from the aspect ratio.

        Args:
            img: Source image (not modified)
            width: Target width in pixels

        Returns:
            New image of size (width, round(height * width / img.width))
        """
        if width < 1:
            raise ValueError(f"Target width must be positive, got {width}")
        height = self.scaled_height(img.size, width)
        return img.resize((width, height), self.resample)

    @staticmethod
    def scaled_height(size: Tuple[int, int], width: int) -> int:
        """Height matching width for an image of the given size."""
        src_width, src_height = size
        return max(1, round(src_height * width / src_width))

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert image to RGB, flattening transparency onto white."""
        if img.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode == 'LA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode == 'P':
            img = img.convert('RGBA')
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[-1])
            return background
        elif img.mode != 'RGB':
            return img.convert('RGB')
        return img.copy()


def photo_dimension(path: str, logger: Optional[logging.Logger] = None) -> Tuple[int, int]:
    """
    Read the pixel dimensions of a photo from its header.

    Returns:
        (width, height), or (0, 0) if the file cannot be read
    """
    logger = logger or logging.getLogger(__name__)
    try:
        with Image.open(path) as img:
            return img.size
    except Exception as e:
        logger.error(f"{path}: {e}")
        return 0, 0
