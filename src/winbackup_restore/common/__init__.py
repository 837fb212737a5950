"""Common utilities for winbackup_restore packages."""

from .config import ConfigLoader
from .config_utils import expand_path_variables
from .logging import setup_logging, log_context
from .logging_config import LoggingConfig
from .errors import RestoreError, FileProcessingError
from .path_utils import normalize_entry_path

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'expand_path_variables',
    'setup_logging',
    'log_context',
    'RestoreError',
    'FileProcessingError',
    'normalize_entry_path',
]
