# src/main.py — v1
"""CLI entry point — new, write, purge, banner commands.

Usage:
    logwarden new <path> [--strategy standard|circular|date_stamped] [options]
    logwarden write <message> [--log-file PATH] [options]
    logwarden purge <directory> <pattern> [--purge-after 7d] [--keep N]
    logwarden banner <message> [--log-file PATH]

Each invocation is its own process, so ``write`` and ``banner`` need
``--log-file`` (or LOGWARDEN_DEFAULT_LOG_FILE) to persist anything.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from logwarden.logging.logger import get_logger
from logwarden.version import __version__

logger = get_logger("main")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        _setup_logging(args.verbose)
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="logwarden",
        description=f"logwarden v{__version__} — log file lifecycle manager",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- new ---
    p_new = subparsers.add_parser("new", help="Create a log file")
    p_new.add_argument("path", type=Path, help="Base log file path")
    p_new.add_argument(
        "-s", "--strategy", default="standard",
        help="Naming strategy: standard, circular, date_stamped (default: standard)",
    )
    p_new.add_argument(
        "--append", action="store_true",
        help="Keep existing content (standard naming only)",
    )
    p_new.add_argument(
        "--purge-after", default=None,
        help="Delete sibling log files older than this, e.g. 7d, 12h",
    )
    p_new.add_argument(
        "--keep", type=int, default=-1,
        help="Number of sibling log files to keep (default: -1, disabled)",
    )
    p_new.set_defaults(func=_cmd_new)

    # --- write ---
    p_write = subparsers.add_parser("write", help="Append a message to a log file")
    p_write.add_argument("message", help="Message text")
    p_write.add_argument("-f", "--log-file", type=Path, default=None, help="Target log file")
    p_write.add_argument(
        "-c", "--channel", default="plain",
        help="plain, verbose, debug, warning, error (default: plain)",
    )
    p_write.add_argument("--no-timestamp", action="store_true", help="Omit the timestamp")
    p_write.add_argument("--color", default=None, help="Console colour, e.g. green")
    p_write.add_argument(
        "--error-action", choices=["stop", "continue"], default=None,
        help="Fail (stop) or warn (continue) when the write cannot be completed",
    )
    p_write.set_defaults(func=_cmd_write)

    # --- purge ---
    p_purge = subparsers.add_parser("purge", help="Delete old log files")
    p_purge.add_argument("directory", type=Path, help="Directory holding the log files")
    p_purge.add_argument("pattern", help="File name glob, e.g. 'App*.log'")
    p_purge.add_argument("--purge-after", default=None, help="Maximum age, e.g. 7d")
    p_purge.add_argument("--keep", type=int, default=-1, help="Newest files to keep")
    p_purge.add_argument(
        "--dry-run", action="store_true", help="List what would be deleted",
    )
    p_purge.set_defaults(func=_cmd_purge)

    # --- banner ---
    p_banner = subparsers.add_parser("banner", help="Write a banner")
    p_banner.add_argument("message", help="Banner text")
    p_banner.add_argument("-f", "--log-file", type=Path, default=None, help="Target log file")
    p_banner.add_argument("--color", default=None, help="Console colour")
    p_banner.set_defaults(func=_cmd_banner)

    return parser


def _cmd_new(args: argparse.Namespace) -> int:
    """Create a log file and print its concrete path."""
    from logwarden.api.facade import new_log_file
    from logwarden.config.settings import Settings
    from logwarden.core.models import FileCreationConfig
    from logwarden.logging.context import LogSession

    settings = Settings()
    config = FileCreationConfig(
        path=args.path,
        naming_strategy=args.strategy,
        append=args.append,
        purge_after=args.purge_after or settings.default_purge_after,
        keep_number_of_files=(
            args.keep if args.keep != -1 else settings.default_keep_files
        ),
    )
    descriptor = new_log_file(config, LogSession(settings=settings))
    print(descriptor.path)
    return 0


def _cmd_write(args: argparse.Namespace) -> int:
    """Append a single message."""
    from logwarden.api.facade import write_log
    from logwarden.config.settings import Settings
    from logwarden.core.models import WriteConfig
    from logwarden.logging.context import LogSession

    settings = Settings()
    config = WriteConfig(
        message=args.message,
        log_file=args.log_file or settings.default_log_file,
        no_timestamp=args.no_timestamp,
        channel=args.channel,
        color=args.color,
        error_action=args.error_action,
    )
    result = write_log(config, LogSession(settings=settings))
    if result is not None and not result.success:
        return 1
    return 0


def _cmd_purge(args: argparse.Namespace) -> int:
    """Purge (or list) log files matching a pattern."""
    from logwarden.core.models import PurgeCriteria
    from logwarden.core.units import parse_duration
    from logwarden.retention.purge import apply_purge, evaluate_purge

    if not args.directory.is_dir():
        logger.error("Not a directory: %s", args.directory)
        return 1

    criteria = PurgeCriteria(
        directory=args.directory,
        glob_pattern=args.pattern,
        max_age=parse_duration(args.purge_after) if args.purge_after else None,
        keep_count=args.keep,
    )
    result = evaluate_purge(criteria)
    if args.dry_run:
        for path in result.deletions:
            print(path)
        return 0

    result = apply_purge(result)
    print(f"\nPurge complete:")
    print(f"  Selected:  {len(result.deletions)}")
    print(f"  Deleted:   {len(result.deleted)}")
    print(f"  Failed:    {len(result.failed)}")
    for warning in result.warnings:
        print(f"  Warning:   {warning}")
    return 0


def _cmd_banner(args: argparse.Namespace) -> int:
    """Write a banner to the console and, optionally, a log file."""
    from logwarden.api.facade import write_banner
    from logwarden.config.settings import Settings
    from logwarden.logging.context import LogSession

    settings = Settings()
    write_banner(
        args.message,
        LogSession(settings=settings),
        log_file=args.log_file or settings.default_log_file,
        color=args.color,
    )
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logwarden diagnostics from LOGWARDEN_LOG_LEVEL / LOG_FORMAT.

    ``--verbose`` forces DEBUG regardless of the configured level.
    """
    from logwarden.config.settings import Settings
    from logwarden.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
    )


if __name__ == "__main__":
    sys.exit(main())
