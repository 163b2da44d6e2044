"""
Command Line Interface for photoprep.
"""

import argparse
import logging
from typing import List, Optional

from .config import ResizeConfig
from .errors import PhotoprepError
from .manifest import CategoryIndex, CategoryManifest
from .naming import slug
from .pipeline import resize
from .reporter import Reporter
from .resize_engine import photo_dimension
from .resize_progress import ResizeProgress

DEFAULT_SIZES = [2560, 1280, 640]


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logging.getLogger('PIL').setLevel(logging.WARNING)

    return logging.getLogger('photoprep')


def get_config(args: argparse.Namespace) -> ResizeConfig:
    """Get configuration from environment and CLI overrides."""
    config = ResizeConfig.from_env()

    if getattr(args, 'root', None):
        config.root = args.root
    if getattr(args, 'watermark_path', None):
        config.watermark_path = args.watermark_path
    if getattr(args, 'quality', None):
        config.quality = args.quality

    return config


def cmd_resize(args: argparse.Namespace) -> int:
    """Execute resize command."""
    logger = setup_logging(args.verbose)

    config = get_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    sizes = args.size or DEFAULT_SIZES

    logger.info(f"Input: {args.input_dir}")
    logger.info(f"Category: {args.category} ({slug(args.category)})")
    logger.info(f"Output root: {config.root}")
    logger.info(f"Sizes: {', '.join(str(s) for s in sizes)}")
    if args.watermark:
        logger.info(f"Watermark: {config.watermark_path}")

    progress = None
    if not args.quiet:
        progress = ResizeProgress(show_files=args.show_files, logger=logger)

    try:
        stats = resize(
            args.input_dir,
            args.author,
            args.category,
            sizes,
            watermark=args.watermark,
            config=config,
            progress=progress,
            logger=logger,
            on_error=args.on_error,
            index_skipped=args.index_skipped,
            dry_run=args.dry_run,
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except PhotoprepError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Resize failed: {e}")
        return 1

    if not args.quiet:
        print()
        print(f"Run: {stats.run_id}")
        print(f"Processed: {stats.processed}")
        print(f"Skipped: {stats.skipped}")
        print(f"Errors: {stats.errors}")
        print(f"Time: {stats.elapsed_seconds:.1f}s")

    return 0 if stats.errors == 0 else 1


def cmd_report(args: argparse.Namespace) -> int:
    """Execute report command."""
    logger = setup_logging(args.verbose)
    config = get_config(args)

    category = slug(args.category)
    manifest = CategoryManifest.load(config.root, category, logger=logger)
    index = CategoryIndex.load(config.root, logger=logger)
    if not len(manifest) and category not in index:
        logger.error(f"No state recorded for category {category} under {config.root}")
        return 1

    Reporter(logger=logger).report_summary(manifest, index)
    return 0


def cmd_dimensions(args: argparse.Namespace) -> int:
    """Execute dimensions command."""
    logger = setup_logging(args.verbose)
    width, height = photo_dimension(args.path, logger=logger)
    if not width:
        return 1
    print(f"{width}x{height}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='photoprep',
        description='Incremental multi-resolution derivatives for photo galleries',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m photoprep resize photos/blog --author "Jane Doe" --category blog --watermark
  python -m photoprep report --category blog
  python -m photoprep dimensions photos/blog/sunset.jpg

Environment:
  PHOTOPREP_ROOT, PHOTOPREP_WATERMARK, PHOTOPREP_QUALITY, PHOTOPREP_PLACEHOLDER_WIDTH
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Resize command
    resize_parser = subparsers.add_parser('resize', help='Generate derivatives for changed photos')
    resize_parser.add_argument('input_dir', help='Directory of source photos')
    resize_parser.add_argument('-a', '--author', required=True, help='Author name for file names')
    resize_parser.add_argument('-c', '--category', required=True, help='Output category')
    resize_parser.add_argument('-s', '--size', type=int, action='append',
                               help='Target width, repeatable; first is watermarked '
                                    '(default: 2560 1280 640)')
    resize_parser.add_argument('-w', '--watermark', action='store_true',
                               help='Watermark the first size')
    resize_parser.add_argument('--watermark-path', help='Override PHOTOPREP_WATERMARK')
    resize_parser.add_argument('--root', help='Override PHOTOPREP_ROOT')
    resize_parser.add_argument('--quality', type=int, help='Override PHOTOPREP_QUALITY')
    resize_parser.add_argument('--on-error', choices=['skip', 'abort'], default='skip',
                               help='Skip a failing photo or abort the whole run (default: skip)')
    resize_parser.add_argument('--index-skipped', action='store_true',
                               help='Also index paths of unchanged photos')
    resize_parser.add_argument('-n', '--dry-run', action='store_true', help='Show what would be done')
    resize_parser.add_argument('-q', '--quiet', action='store_true', help='Suppress progress output')
    resize_parser.add_argument('--show-files', action='store_true',
                               help='Print each photo as processed with result')
    resize_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    # Report command
    report_parser = subparsers.add_parser('report', help='Summarize a category')
    report_parser.add_argument('-c', '--category', required=True, help='Category to report on')
    report_parser.add_argument('--root', help='Override PHOTOPREP_ROOT')
    report_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    # Dimensions command
    dim_parser = subparsers.add_parser('dimensions', help='Print the dimensions of a photo')
    dim_parser.add_argument('path', help='Photo path')
    dim_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'resize':
        return cmd_resize(parsed_args)
    elif parsed_args.command == 'report':
        return cmd_report(parsed_args)
    elif parsed_args.command == 'dimensions':
        return cmd_dimensions(parsed_args)

    return 1
