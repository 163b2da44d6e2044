"""
Content fingerprints used for change detection.

Only file bytes count: timestamps and sizes are never consulted, so a
touched-but-unchanged photo is still skipped and a rewritten photo with
the same size is still reprocessed.
"""

import hashlib

from .errors import PhotoReadError

CHUNK_SIZE = 1024 * 1024


def fingerprint(path: str) -> str:
    """
    Compute the SHA-1 hex digest of a file.

    Raises:
        PhotoReadError: If the file cannot be read
    """
    digest = hashlib.sha1()
    try:
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
                digest.update(chunk)
    except OSError as e:
        raise PhotoReadError(f"Cannot read {path}: {e}", path=path) from e
    return digest.hexdigest()
