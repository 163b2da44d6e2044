"""
Pipeline - Incrementally produces derivatives for one category of photos.
"""

import logging
import os
from typing import Callable, List, Optional, Sequence

from PIL import Image

from .artifact_writer import ArtifactWriter
from .config import ResizeConfig
from .errors import PhotoError, PipelineAborted
from .fingerprint import fingerprint
from .manifest import CategoryIndex, CategoryManifest, ManifestEntry
from .naming import derivative_path, expected_paths, new_run_id, photo_key, placeholder_path, slug
from .placeholder import BlurPlaceholderGenerator, PlaceholderGenerator
from .resize_engine import ResizeEngine
from .resize_progress import ResizeProgress
from .resize_stats import ResizeStats
from .scanner import PhotoScanner
from .watermark import WatermarkCompositor

ERROR_POLICIES = ('skip', 'abort')


class Pipeline:
    """
    Resizes every changed photo of a source tree for one category.

    A photo is skipped when its content fingerprint matches the manifest
    entry stored for it. Otherwise each configured size is generated under
    the run's identity, the first size optionally watermarked, a placeholder
    is requested, and the manifest entry is replaced. The manifest and the
    category index are persisted once, after every photo has been handled.
    """

    def __init__(
        self,
        config: ResizeConfig,
        manifest: CategoryManifest,
        index: CategoryIndex,
        scanner: Optional[PhotoScanner] = None,
        resize_engine: Optional[ResizeEngine] = None,
        compositor: Optional[WatermarkCompositor] = None,
        writer: Optional[ArtifactWriter] = None,
        placeholder: Optional[PlaceholderGenerator] = None,
        on_error: str = 'skip',
        index_skipped: bool = False,
        dry_run: bool = False,
        run_id_factory: Callable[[], str] = new_run_id,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Resize configuration
            manifest: Loaded manifest of the category to process
            index: Loaded shared category index
            scanner: Photo scanner (default: PhotoScanner)
            resize_engine: Resize engine (default: Lanczos ResizeEngine)
            compositor: Watermark compositor
            writer: Artifact writer (default: JPEG at config.quality)
            placeholder: Placeholder generator (default: blurred-preview SVG)
            on_error: 'skip' to log and skip a failing photo, 'abort' to
                abandon the whole run without persisting anything
            index_skipped: Also record the paths of unchanged photos in the
                category index on every run
            dry_run: If True, report what would change without writing
            run_id_factory: Callable producing the run identity
            logger: Optional logger instance
        """
        if on_error not in ERROR_POLICIES:
            raise ValueError(f"on_error must be one of {ERROR_POLICIES}, got {on_error!r}")

        self.config = config
        self.manifest = manifest
        self.index = index
        self.logger = logger or logging.getLogger(__name__)
        self.scanner = scanner or PhotoScanner(logger=self.logger)
        self.engine = resize_engine or ResizeEngine(logger=self.logger)
        self.compositor = compositor or WatermarkCompositor(logger=self.logger)
        self.writer = writer or ArtifactWriter(quality=config.quality, logger=self.logger)
        self.placeholder = placeholder or BlurPlaceholderGenerator(
            config.root,
            preview_width=config.placeholder_width,
            resize_engine=self.engine,
            logger=self.logger,
        )
        self.on_error = on_error
        self.index_skipped = index_skipped
        self.dry_run = dry_run
        self.run_id_factory = run_id_factory
        self.stats = ResizeStats()
        self._stop_requested = False

    @property
    def category(self) -> str:
        return self.manifest.category

    def stop(self) -> None:
        """Request the pipeline to stop after the current photo."""
        self._stop_requested = True

    def run(
        self,
        input_dir: str,
        author: str,
        sizes: Sequence[int],
        watermark: bool = False,
        progress: Optional[ResizeProgress] = None
    ) -> ResizeStats:
        """
        Process every photo under input_dir.

        Args:
            input_dir: Source directory (scanned recursively)
            author: Author name embedded in derivative file names
            sizes: Target widths; only the first is watermarked
            watermark: Composite the configured watermark onto the first size
            progress: Optional progress tracker

        Returns:
            ResizeStats for the run

        Raises:
            ValueError: If sizes is empty or holds a non-positive width
            WatermarkError: If watermarking is requested and the watermark
                cannot be loaded
            PipelineAborted: If a photo fails under the 'abort' policy
        """
        if not sizes:
            raise ValueError("At least one target size is required")
        if any(size < 1 for size in sizes):
            raise ValueError(f"Target sizes must be positive, got {list(sizes)}")

        run_id = self.run_id_factory()
        self.stats = ResizeStats(run_id=run_id)

        if self._stop_requested:
            self.logger.info("Stop was requested before the run started")
            return self.stats

        mark = self.compositor.load(self.config.watermark_path) if watermark else None

        photos = self.scanner.scan(input_dir)
        self.stats.discovered = len(photos)

        mode_str = " [DRY RUN]" if self.dry_run else ""
        self.logger.info(
            f"Starting run {run_id} for {self.category}: {len(photos)} photos, "
            f"sizes {list(sizes)}{mode_str}"
        )

        new_paths = []

        for photo in photos:
            if self._stop_requested:
                self.logger.info("Stop requested, halting run")
                break

            try:
                new_paths.extend(
                    self._process_photo(photo, run_id, author, sizes, mark, progress)
                )
            except PhotoError as e:
                if self.on_error == 'abort':
                    self.logger.error(f"Aborting run {run_id}: {e}")
                    raise PipelineAborted(f"Run {run_id} aborted at {photo}: {e}") from e

                error_msg = f"Error processing {photo}: {e}"
                self.logger.error(error_msg)
                self.stats.errors += 1
                self.stats.error_details.append(error_msg)
                if progress:
                    progress.on_photo_processed(photo, success=False, error=str(e))

            if progress:
                progress.on_progress_update(self.stats)

        if self.dry_run:
            self.logger.info(f"[DRY RUN] {self.stats.processed} photos would be processed")
            return self.stats

        self.index.extend(self.category, new_paths)
        self.manifest.persist()
        self.index.persist()

        self.logger.info(
            f"Run {run_id} complete: {self.stats.processed} processed, "
            f"{self.stats.skipped} skipped, {self.stats.errors} errors "
            f"({self.stats.elapsed_seconds:.1f}s)"
        )
        return self.stats

    def _process_photo(
        self,
        photo: str,
        run_id: str,
        author: str,
        sizes: Sequence[int],
        mark: Optional[Image.Image],
        progress: Optional[ResizeProgress]
    ) -> List[str]:
        """
        Bring one photo up to date.

        Returns:
            Paths to append to the category index for this photo
        """
        key = photo_key(photo)
        sha = fingerprint(photo)
        entry = self.manifest.get(key)

        if entry is not None and entry.sha == sha:
            self.stats.skipped += 1
            if progress:
                progress.on_photo_skipped(photo, f"unchanged since run {entry.id}")
            else:
                self.logger.debug(f"Unchanged: {photo}")
            if self.index_skipped:
                return expected_paths(
                    self.config.root, entry.id, self.category, sizes, photo, author
                )
            return []

        if self.dry_run:
            self.stats.processed += 1
            if progress:
                progress.on_dry_run(photo)
            else:
                self.logger.info(f"[DRY RUN] Would process: {photo}")
            return []

        source = self.engine.open(photo)
        written = []
        for idx, size in enumerate(sizes):
            derivative = self.engine.resize(source, size)
            if mark is not None and idx == 0:
                derivative = self.compositor.composite(derivative, mark)

            destination = derivative_path(
                self.config.root, run_id, self.category, size, photo, author
            )
            self.stats.bytes_written += self.writer.write(derivative, destination)
            self.stats.derivatives_written += 1
            written.append(destination)

        try:
            self.placeholder.generate(run_id, photo, author, self.category)
        except Exception as e:
            self.logger.warning(f"Placeholder failed for {photo}: {e}")
        written.append(placeholder_path(self.config.root, run_id, self.category, photo, author))

        self.manifest.set(key, ManifestEntry(sha=sha, id=run_id))
        self.stats.processed += 1

        if progress:
            progress.on_photo_processed(photo, success=True, derivatives=len(sizes))
        else:
            self.logger.info(
                f"Processed: {os.path.basename(photo)} "
                f"[{self.stats.completed_count}/{self.stats.discovered}]"
            )
        return written


def resize(
    input_dir: str,
    author: str,
    category: str,
    sizes: Sequence[int],
    watermark: bool = False,
    config: Optional[ResizeConfig] = None,
    progress: Optional[ResizeProgress] = None,
    logger: Optional[logging.Logger] = None,
    **options
) -> ResizeStats:
    """
    Load state for category, run the pipeline over input_dir and persist.

    Args:
        input_dir: Existing source directory
        author: Author name embedded in derivative file names
        category: Output category; slugified before use
        sizes: Non-empty sequence of target widths
        watermark: Watermark the first size
        config: Resize configuration (default: from environment)
        progress: Optional progress tracker
        logger: Optional logger instance
        **options: Extra Pipeline arguments (on_error, index_skipped, dry_run, ...)

    Returns:
        ResizeStats for the run
    """
    config = config or ResizeConfig.from_env()
    logger = logger or logging.getLogger(__name__)

    manifest = CategoryManifest.load(config.root, slug(category), logger=logger)
    index = CategoryIndex.load(config.root, logger=logger)

    pipeline = Pipeline(config, manifest, index, logger=logger, **options)
    return pipeline.run(input_dir, author, sizes, watermark=watermark, progress=progress)
