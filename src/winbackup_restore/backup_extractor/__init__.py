"""Discovery, ordering and extraction of backup archives."""

from .archives import ArchiveEntry, ArchiveFormat, ArchiveRef, open_archive
from .analysis import BackupAnalysis, analyze
from .discovery import ArchiveDiscovery, locate
from .errors import ArchiveError, DestinationCreateError, SourceReadError, UnsupportedArchiveError
from .extractor import ArchiveExtractor, extract
from .natural_order import compare_natural, natural_sort_key, natural_sorted
from .results import (
    ArchiveSummary, ExtractionError, ExtractionResult, ExtractionResultBuilder, ExtractionStage
)

__all__ = [
    'ArchiveEntry',
    'ArchiveFormat',
    'ArchiveRef',
    'open_archive',
    'BackupAnalysis',
    'analyze',
    'ArchiveDiscovery',
    'locate',
    'ArchiveError',
    'DestinationCreateError',
    'SourceReadError',
    'UnsupportedArchiveError',
    'ArchiveExtractor',
    'extract',
    'compare_natural',
    'natural_sort_key',
    'natural_sorted',
    'ArchiveSummary',
    'ExtractionError',
    'ExtractionResult',
    'ExtractionResultBuilder',
    'ExtractionStage',
]
