"""Extraction outcome records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class ExtractionStage(Enum):
    """Step of the extraction at which a recoverable failure occurred."""
    ARCHIVE_OPEN = "archive-open"
    ENTRY_READ = "entry-read"
    DIRECTORY_CREATE = "directory-create"
    FILE_CREATE = "file-create"
    FILE_WRITE = "file-write"


@dataclass(frozen=True)
class ExtractionError:
    """A recoverable failure recorded during extraction.

    Attributes:
        archive: Name of the archive being processed
        stage: Step that failed
        cause: Description of the underlying error
        target: Entry name, entry index or directory involved, if any
    """
    archive: str
    stage: ExtractionStage
    cause: str
    target: Optional[str] = None

    def __str__(self) -> str:
        if self.target:
            return f"{self.archive}: {self.stage.value} {self.target}: {self.cause}"
        return f"{self.archive}: {self.stage.value}: {self.cause}"


@dataclass(frozen=True)
class ArchiveSummary:
    """Per-archive outcome, in processing order."""
    archive: str
    files_extracted: int
    opened: bool


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction run."""
    files_extracted: int = 0
    errors: Tuple[ExtractionError, ...] = ()
    archives: Tuple[ArchiveSummary, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def succeeded(self) -> bool:
        """True when no recoverable error was recorded."""
        return not self.errors


@dataclass
class ExtractionResultBuilder:
    """Accumulates the outcome of an extraction run.

    Owned by a single run; errors are append-only and the file counter
    only grows.
    """
    files_extracted: int = 0
    errors: List[ExtractionError] = field(default_factory=list)
    archives: List[ArchiveSummary] = field(default_factory=list)

    def record_extracted(self) -> None:
        self.files_extracted += 1

    def record_error(
        self,
        archive: str,
        stage: ExtractionStage,
        cause: BaseException | str,
        target: Optional[str] = None,
    ) -> ExtractionError:
        if isinstance(cause, BaseException):
            # Some exceptions (EOFError, zlib) carry no message
            cause = str(cause) or type(cause).__name__
        error = ExtractionError(archive=archive, stage=stage, cause=cause, target=target)
        self.errors.append(error)
        return error

    def record_archive(self, archive: str, files_extracted: int, opened: bool) -> None:
        self.archives.append(ArchiveSummary(archive, files_extracted, opened))

    def build(self) -> ExtractionResult:
        return ExtractionResult(
            files_extracted=self.files_extracted,
            errors=tuple(self.errors),
            archives=tuple(self.archives),
        )
