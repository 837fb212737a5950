"""Extraction of backup archives into a single restored folder tree."""

import logging
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence

from winbackup_restore.common import log_context, normalize_entry_path

from .archives import ARCHIVE_OPEN_ERRORS, ARCHIVE_READ_ERRORS, ArchiveEntry, ArchiveRef, open_archive
from .errors import DestinationCreateError
from .results import ExtractionResult, ExtractionResultBuilder, ExtractionStage

logger = logging.getLogger(__name__)

# Buffer size for streaming entry content to disk
COPY_CHUNK_SIZE = 65536

ProgressCallback = Callable[[int, int, str], None]


def _copy_stream(source: BinaryIO, target: BinaryIO) -> None:
    while True:
        chunk = source.read(COPY_CHUNK_SIZE)
        if not chunk:
            break
        target.write(chunk)


class ArchiveExtractor:
    """Extracts archives, in the given order, into one target directory.

    Entries from every archive are merged into the same tree. When two
    archives contain the same path, the one processed later wins.
    Failures of a single archive or entry are recorded and skipped; only a
    target directory that cannot be created stops the run.
    """

    def __init__(self, target_dir: Path):
        """Initialize archive extractor.

        Args:
            target_dir: Directory to extract archives to (created if missing)
        """
        self.target_dir = Path(target_dir)

    def extract_all(
        self,
        archives: Sequence[ArchiveRef],
        progress_callback: Optional[ProgressCallback] = None
    ) -> ExtractionResult:
        """Extract multiple archives.

        Args:
            archives: Archives to extract, in processing order
            progress_callback: Optional callback(current, total, archive_name),
                current is 1-based

        Returns:
            Files extracted and every recoverable error, in encounter order

        Raises:
            DestinationCreateError: If the target directory cannot be created
        """
        self._create_target_dir()

        builder = ExtractionResultBuilder()
        total = len(archives)

        for i, archive in enumerate(archives, start=1):
            if progress_callback:
                progress_callback(i, total, archive.display_name)

            with log_context(archive=archive.display_name):
                self.extract(archive, builder)

        result = builder.build()
        logger.info(
            f"Extraction complete: {result.files_extracted} file(s) from "
            f"{total} archive(s), {result.error_count} error(s)"
        )
        return result

    def extract(self, archive: ArchiveRef, builder: ExtractionResultBuilder) -> int:
        """Extract one archive into the target directory.

        Args:
            archive: Archive to extract
            builder: Run-wide result accumulator

        Returns:
            Number of files written from this archive
        """
        logger.info(f"Extracting {archive}")

        try:
            reader = open_archive(archive)
        except ARCHIVE_OPEN_ERRORS as e:
            logger.error(f"Failed to open {archive.display_name}: {e}")
            builder.record_error(archive.display_name, ExtractionStage.ARCHIVE_OPEN, e)
            builder.record_archive(archive.display_name, files_extracted=0, opened=False)
            return 0

        extracted = 0
        with reader:
            for entry in reader.entries():
                # Directories come into existence through the files they hold
                if entry.is_dir:
                    logger.debug(f"Skipping directory entry: {entry.name}")
                    continue

                if self._extract_entry(archive, entry, builder):
                    extracted += 1

        builder.record_archive(archive.display_name, files_extracted=extracted, opened=True)
        logger.info(f"Extracted {extracted} file(s) from {archive.display_name}")
        return extracted

    def _extract_entry(
        self,
        archive: ArchiveRef,
        entry: ArchiveEntry,
        builder: ExtractionResultBuilder
    ) -> bool:
        """Write one file entry below the target directory.

        Returns:
            True if the file was written completely
        """
        relative_path = normalize_entry_path(entry.name)
        target_path = self.target_dir / relative_path

        try:
            source = entry.open()
        except ARCHIVE_READ_ERRORS as e:
            self._record(builder, archive, ExtractionStage.ENTRY_READ, e, f"#{entry.index} {entry.name}")
            return False

        with source:
            try:
                target_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self._record(builder, archive, ExtractionStage.DIRECTORY_CREATE, e, str(target_path.parent))
                return False

            try:
                target = open(target_path, 'wb')
            except OSError as e:
                self._record(builder, archive, ExtractionStage.FILE_CREATE, e, relative_path)
                return False

            # Closing flushes the last buffered chunk and can fail too (disk full)
            try:
                with target:
                    _copy_stream(source, target)
            except ARCHIVE_READ_ERRORS as e:
                self._record(builder, archive, ExtractionStage.FILE_WRITE, e, relative_path)
                return False

        builder.record_extracted()
        logger.debug(f"Extracted {entry.name} -> {relative_path}")
        return True

    def _record(
        self,
        builder: ExtractionResultBuilder,
        archive: ArchiveRef,
        stage: ExtractionStage,
        cause: BaseException,
        target: str
    ) -> None:
        error = builder.record_error(archive.display_name, stage, cause, target)
        logger.warning(f"Skipped entry: {error}")

    def _create_target_dir(self) -> None:
        try:
            self.target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationCreateError(
                f"Cannot create target directory {self.target_dir}: {e}",
                path=str(self.target_dir),
            ) from e


def extract(
    archives: Sequence[ArchiveRef],
    target_dir: Path,
    progress_callback: Optional[ProgressCallback] = None
) -> ExtractionResult:
    """Extract archives, in order, into target_dir.

    Raises:
        DestinationCreateError: If target_dir cannot be created
    """
    return ArchiveExtractor(target_dir).extract_all(archives, progress_callback)
