"""
ResizeConfig - Configuration for the resize pipeline.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class ResizeConfig:
    """
    Configuration for the resize pipeline.

    Attributes:
        root: Output root holding photos/ and the manifest documents
        watermark_path: Watermark image composited onto the first size
        quality: JPEG quality for derivatives
        placeholder_width: Width of the preview embedded in placeholders
    """
    root: str = '.photoprep'
    watermark_path: str = 'watermark.png'
    quality: int = 85
    placeholder_width: int = 32

    @classmethod
    def from_env(cls) -> 'ResizeConfig':
        """Create configuration from PHOTOPREP_* environment variables."""
        defaults = cls()
        return cls(
            root=os.environ.get('PHOTOPREP_ROOT', defaults.root),
            watermark_path=os.environ.get('PHOTOPREP_WATERMARK', defaults.watermark_path),
            quality=int(os.environ.get('PHOTOPREP_QUALITY', defaults.quality)),
            placeholder_width=int(
                os.environ.get('PHOTOPREP_PLACEHOLDER_WIDTH', defaults.placeholder_width)
            ),
        )

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        if not self.root:
            errors.append("Output root is required (PHOTOPREP_ROOT or --root)")
        if not 1 <= self.quality <= 95:
            errors.append(f"JPEG quality must be between 1 and 95, got {self.quality}")
        if self.placeholder_width < 1:
            errors.append(f"Placeholder width must be positive, got {self.placeholder_width}")
        return errors
