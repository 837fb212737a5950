"""Base error definitions for winbackup_restore packages."""

from typing import Any, Dict


class RestoreError(Exception):
    """Base exception for all winbackup_restore errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class FileProcessingError(RestoreError):
    """Base exception for file processing errors."""
    pass
