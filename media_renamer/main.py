import argparse
import logging
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from . import config
from .core import MediaRenamerApp
from .exceptions import FatalError, InvalidTimezoneError
from .models import RenameSettings
from .reporting import ReportGenerator
from .scanning.filesystem import normalize_extensions

def setup_logging(verbose: bool):
    """Sets up console logging; one line per processed file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="media-renamer",
        description="Rename photos and videos after their capture time, camera and shot number.",
    )

    p.add_argument("directory", type=Path, nargs="?", default=Path("."),
                   help="Directory to process (default: current directory, not recursive)")

    p.add_argument("-n", "--dry-run", action="store_true", help="Log intended renames without modifying disk")
    p.add_argument("-p", "--prefix", default="", help="File name prefix, e.g. VCH")
    p.add_argument("--tz", default=config.DEFAULT_TIMEZONE,
                   help="IANA time zone the camera clock was set to (default: UTC)")

    p.add_argument("-e", "--ext", action="append", default=[], metavar="EXT",
                   help="Only process files with this extension (repeatable)")
    p.add_argument("--media-only", action="store_true", help="Only process known photo/video extensions")
    p.add_argument("--timeout", type=float, default=None, help="Seconds to wait for exiftool per file")

    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file outcome report to this CSV")
    p.add_argument("--progress", action="store_true", help="Show a progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)

def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(f"unknown time zone {name!r}") from e

def build_settings(args) -> RenameSettings:
    extensions = None
    if args.ext:
        extensions = normalize_extensions(args.ext)
    if args.media_only:
        extensions = (extensions or frozenset()) | config.MEDIA_EXTS

    return RenameSettings(
        timezone=load_timezone(args.tz),
        prefix=args.prefix,
        dry_run=args.dry_run,
        extensions=extensions,
        exiftool_timeout=args.timeout,
        progress=args.progress,
    )

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = build_settings(args)
        app = MediaRenamerApp(settings)
        outcomes = app.run(args.directory)
    except FatalError as e:
        logging.error(f"{e}")
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1

    reporter = ReportGenerator(outcomes)
    reporter.log_summary()
    if args.report_csv:
        try:
            reporter.write_csv(args.report_csv)
        except OSError as e:
            logging.error(f"Failed to write report {args.report_csv}: {e}")
            return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
