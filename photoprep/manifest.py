"""
Manifest - Durable per-category state and the shared category index.

Two kinds of JSON document live in the output root:

    {category}.json   {photo_key: {"sha": ..., "id": ...}}
    photos.json       {category: [path, ...]}

Both are loaded fully before a run and rewritten fully at its end. A
missing or malformed document loads as empty state, which makes the next
run reprocess everything.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

INDEX_FILENAME = 'photos.json'


@dataclass
class ManifestEntry:
    """
    Record of the last processed version of a source photo.

    Attributes:
        sha: Content fingerprint of the processed file
        id: Run identity that produced its derivatives
    """
    sha: str
    id: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'ManifestEntry':
        return cls(sha=str(data['sha']), id=str(data['id']))


def _read_document(path: Path, logger: logging.Logger) -> dict:
    """Read a JSON object from path, or {} if it is missing or unusable."""
    if not path.exists():
        logger.debug(f"No document at {path}, starting empty")
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable document {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring malformed document {path}: expected an object")
        return {}
    return data


def _write_document(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write('\n')


class CategoryManifest:
    """
    Per-category map from photo key to ManifestEntry.
    """

    def __init__(
        self,
        category: str,
        path: str,
        entries: Optional[Dict[str, ManifestEntry]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize manifest.

        Args:
            category: Slugified category name
            path: Document path used by persist()
            entries: Initial entries keyed by photo key
            logger: Optional logger instance
        """
        self.category = category
        self.path = Path(path)
        self.entries: Dict[str, ManifestEntry] = dict(entries or {})
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def document_path(root: str, category: str) -> str:
        return os.path.join(root, f"{category}.json")

    @classmethod
    def load(
        cls,
        root: str,
        category: str,
        logger: Optional[logging.Logger] = None
    ) -> 'CategoryManifest':
        """Load the manifest for category from root."""
        logger = logger or logging.getLogger(__name__)
        path = cls.document_path(root, category)
        data = _read_document(Path(path), logger)

        entries = {}
        for key, value in data.items():
            try:
                entries[key] = ManifestEntry.from_dict(value)
            except (KeyError, TypeError) as e:
                logger.warning(f"Dropping malformed entry {key!r} in {path}: {e}")

        logger.debug(f"Loaded {len(entries)} entries for {category}")
        return cls(category, path, entries, logger=logger)

    def get(self, key: str) -> Optional[ManifestEntry]:
        return self.entries.get(key)

    def set(self, key: str, entry: ManifestEntry) -> None:
        self.entries[key] = entry

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    @property
    def run_ids(self) -> Dict[str, int]:
        """Number of entries per run identity."""
        counts: Dict[str, int] = {}
        for entry in self.entries.values():
            counts[entry.id] = counts.get(entry.id, 0) + 1
        return counts

    def to_dict(self) -> dict:
        return {key: entry.to_dict() for key, entry in self.entries.items()}

    def persist(self) -> None:
        """Overwrite the document with the current entries."""
        _write_document(self.path, self.to_dict())
        self.logger.debug(f"Saved {len(self.entries)} entries to {self.path}")


class CategoryIndex:
    """
    Shared map from category to the ordered artifact paths produced for it.
    """

    def __init__(
        self,
        path: str,
        categories: Optional[Dict[str, List[str]]] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.path = Path(path)
        self.categories: Dict[str, List[str]] = {
            name: list(paths) for name, paths in (categories or {}).items()
        }
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def document_path(root: str) -> str:
        return os.path.join(root, INDEX_FILENAME)

    @classmethod
    def load(cls, root: str, logger: Optional[logging.Logger] = None) -> 'CategoryIndex':
        """Load the shared index from root."""
        logger = logger or logging.getLogger(__name__)
        path = cls.document_path(root)
        data = _read_document(Path(path), logger)

        categories = {}
        for name, paths in data.items():
            if isinstance(paths, list):
                categories[name] = [str(p) for p in paths]
            else:
                logger.warning(f"Dropping malformed index entry {name!r} in {path}")
        return cls(path, categories, logger=logger)

    def paths(self, category: str) -> List[str]:
        """Copy of the paths recorded for category."""
        return list(self.categories.get(category, []))

    def extend(self, category: str, paths: Iterable[str]) -> None:
        self.categories.setdefault(category, []).extend(paths)

    def __contains__(self, category: str) -> bool:
        return category in self.categories

    def to_dict(self) -> dict:
        return {name: list(paths) for name, paths in self.categories.items()}

    def persist(self) -> None:
        """Overwrite the shared document with every category's paths."""
        _write_document(self.path, self.to_dict())
        self.logger.debug(f"Saved index for {len(self.categories)} categories to {self.path}")
