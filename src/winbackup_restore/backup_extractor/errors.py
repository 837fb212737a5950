"""Extraction-specific errors."""

from winbackup_restore.common import RestoreError, FileProcessingError


class ArchiveError(RestoreError):
    """Archive processing failed."""
    pass


class UnsupportedArchiveError(ArchiveError):
    """Archive format is not supported."""
    pass


class SourceReadError(FileProcessingError):
    """A directory under the source root could not be listed."""
    pass


class DestinationCreateError(FileProcessingError):
    """The destination root could not be created."""
    pass
