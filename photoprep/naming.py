"""
Naming - Slugs, run identities and the on-disk layout of derivatives.

Layout under the output root:

    photos/{run_id}/{category}/{size}/{name}-by-{author}.jpg
    photos/{run_id}/{category}/sqip/{name}-by-{author}.svg
"""

import os
import uuid
from typing import List, Sequence

from slugify import slugify

PHOTOS_DIR = 'photos'
PLACEHOLDER_DIR = 'sqip'
DERIVATIVE_EXT = '.jpg'
PLACEHOLDER_EXT = '.svg'

# Underscores survive slugging, as in existing gallery paths.
SLUG_PATTERN = r'[^-a-z0-9_]+'


def slug(text: str) -> str:
    """Lowercase, ASCII-only slug of text."""
    return slugify(text, regex_pattern=SLUG_PATTERN)


def new_run_id() -> str:
    """Return a fresh identifier for one pipeline invocation."""
    return uuid.uuid4().hex


def photo_key(path: str) -> str:
    """
    Manifest key for a source photo: the slug of its base filename.

    The extension is part of the key, so 'a.jpg' and 'a.png' never collide.
    """
    return slug(os.path.basename(path))


def output_name(filename: str, author: str) -> str:
    """Derivative base name, e.g. 'Sunset Beach.jpg' -> 'sunset-beach-by-jane-doe'."""
    stem = os.path.splitext(os.path.basename(filename))[0]
    return f"{slug(stem)}-by-{slug(author)}"


def run_dir(root: str, run_id: str, category: str) -> str:
    return os.path.join(root, PHOTOS_DIR, run_id, category)


def derivative_path(
    root: str,
    run_id: str,
    category: str,
    size: int,
    filename: str,
    author: str
) -> str:
    """Path of the derivative of filename at the given width."""
    return os.path.join(
        run_dir(root, run_id, category),
        str(size),
        output_name(filename, author) + DERIVATIVE_EXT,
    )


def placeholder_path(
    root: str,
    run_id: str,
    category: str,
    filename: str,
    author: str
) -> str:
    """Path of the vector placeholder of filename."""
    return os.path.join(
        run_dir(root, run_id, category),
        PLACEHOLDER_DIR,
        output_name(filename, author) + PLACEHOLDER_EXT,
    )


def expected_paths(
    root: str,
    run_id: str,
    category: str,
    sizes: Sequence[int],
    filename: str,
    author: str
) -> List[str]:
    """Every artifact path a processed photo produces: each size, then the placeholder."""
    paths = [
        derivative_path(root, run_id, category, size, filename, author)
        for size in sizes
    ]
    paths.append(placeholder_path(root, run_id, category, filename, author))
    return paths
