"""CLI command for restoring a Windows backup folder."""

import logging
import argparse
from pathlib import Path
import sys
from typing import Callable, List, Optional

from .analysis import BackupAnalysis, analyze
from .config import WinBackupRestoreConfig
from .discovery import locate
from .extractor import extract
from .results import ExtractionResult
from winbackup_restore.common import setup_logging, ConfigLoader, RestoreError

APP_NAME = "winbackup-restore"

RULE = "=" * 60

# First letters accepted as consent ("yes", "ja")
CONFIRM_ANSWERS = ("y", "j")

logger = logging.getLogger(__package__ or __name__)


def progress_callback(logger: logging.Logger, current: int, total: int, name: str) -> None:
    """Log extraction progress.

    Args:
        logger: Logger instance
        current: Current archive number (1-based)
        total: Total number of archives
        name: Name of current archive
    """
    percent = (current / total) * 100 if total > 0 else 0
    logger.info(f"Extracting archive {current}/{total} ({percent:.1f}%): {name}")


def format_analysis(source_dir: Path, analysis: BackupAnalysis) -> str:
    """Render the backup analysis report."""
    lines = [
        "",
        RULE,
        " Windows Backup Analyzer",
        RULE,
        f" Source directory:  {source_dir}",
        f" Archives:          {analysis.archive_count}",
        f" Total size:        {analysis.total_size_gb:.2f} GB",
    ]
    if analysis.sample_archive:
        lines.append("")
        lines.append(f" Sample from: {analysis.sample_archive}")
        for ext, count in analysis.extension_counts:
            lines.append(f"   .{ext:<11} -> {count} files")
    lines.append(RULE)
    return "\n".join(lines)


def format_summary(result: ExtractionResult, dest_dir: Path, max_errors: int = 20) -> str:
    """Render the extraction summary, with at most max_errors error lines."""
    lines = [
        "",
        RULE,
        " Extraction completed!",
        f" Files extracted:   {result.files_extracted}",
        f" Errors:            {result.error_count}",
        f" Destination:       {dest_dir}",
        RULE,
    ]
    if result.errors:
        lines.append("")
        lines.append("Error details:")
        for error in result.errors[:max_errors]:
            lines.append(f"  {error}")
        if result.error_count > max_errors:
            lines.append(f"  ... and {result.error_count - max_errors} more errors")
    return "\n".join(lines)


def confirm(prompt: str, input_func: Callable[[str], str] = input) -> bool:
    """Ask a yes/no question; anything not starting with y/j means no."""
    try:
        answer = input_func(prompt)
    except EOFError:
        return False
    return answer.strip().lower().startswith(CONFIRM_ANSWERS)


def restore_command(
    config: WinBackupRestoreConfig,
    source_dir_override: Optional[Path] = None,
    dest_dir_override: Optional[Path] = None,
    analyze_only: bool = False,
    assume_yes_override: Optional[bool] = None,
    follow_symlinks_override: Optional[bool] = None,
    input_func: Callable[[str], str] = input
) -> int:
    """Analyze a backup folder and, after confirmation, restore it.

    Args:
        config: Configuration object
        source_dir_override: Optional override for source directory
        dest_dir_override: Optional override for destination directory
        analyze_only: Only print the analysis
        assume_yes_override: Optional override for skipping the prompt
        follow_symlinks_override: Optional override for descending into
            symlinked directories
        input_func: Function used to read the confirmation answer

    Returns:
        Exit code (0 for success)
    """
    settings = config.restore
    source_dir = source_dir_override or (Path(settings.source_dir) if settings.source_dir else None)
    dest_dir = dest_dir_override or (Path(settings.dest_dir) if settings.dest_dir else None)
    assume_yes = assume_yes_override if assume_yes_override is not None else settings.assume_yes
    follow_symlinks = (
        follow_symlinks_override if follow_symlinks_override is not None else settings.follow_symlinks
    )

    if source_dir is None:
        logger.error("No source directory given")
        return 1

    if not source_dir.is_dir():
        logger.error(f"Directory not found: {source_dir}")
        return 1

    if dest_dir is None and not analyze_only:
        logger.error("No destination directory given")
        return 1

    try:
        archives = locate(source_dir, follow_symlinks=follow_symlinks)
        print(format_analysis(source_dir, analyze(archives)))

        if not archives:
            print("No archives found.")
            return 0

        if analyze_only:
            return 0

        print(f"\n  Source: {source_dir}")
        print(f"  Dest:   {dest_dir}")
        if not assume_yes and not confirm("\nProceed? (y/n): ", input_func):
            print("Cancelled.")
            return 0

        logger.info(f"Starting extraction of {len(archives)} archive(s) into {dest_dir}")
        result = extract(
            archives,
            dest_dir,
            progress_callback=lambda c, t, n: progress_callback(logger, c, t, n)
        )

    except RestoreError as e:
        logger.exception(f"Restore failed: {e}")
        return 1

    print(format_summary(result, dest_dir, settings.max_error_display))
    return 0 if result.succeeded else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Extract Windows backup archives and restore the folder structure"
    )
    parser.add_argument(
        "-s", "--source",
        type=Path,
        help="Path to the backup folder (overrides config)"
    )
    parser.add_argument(
        "-d", "--dest",
        type=Path,
        help="Destination path for restored files (overrides config)"
    )
    parser.add_argument(
        "-a", "--analyze-only",
        action="store_true",
        help="Analyze only, do not extract"
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Do not ask for confirmation before extracting"
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Also search symlinked directories for archives"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the restore command."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=WinBackupRestoreConfig
    )
    config = loader.load(defaults_path=args.config)

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=config.logging.log_file_path
    )

    return restore_command(
        config=config,
        source_dir_override=args.source,
        dest_dir_override=args.dest,
        analyze_only=args.analyze_only,
        assume_yes_override=True if args.yes else None,
        follow_symlinks_override=True if args.follow_symlinks else None,
        input_func=input
    )


if __name__ == "__main__":
    sys.exit(main())
