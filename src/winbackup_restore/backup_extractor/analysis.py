"""Pre-extraction analysis of a backup folder."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional, Sequence, Tuple

from winbackup_restore.common import normalize_entry_path

from .archives import ARCHIVE_OPEN_ERRORS, ArchiveRef, open_archive

logger = logging.getLogger(__name__)

BYTES_PER_GB = 1024 ** 3
DEFAULT_TOP_EXTENSIONS = 10


@dataclass(frozen=True)
class BackupAnalysis:
    """Overview of a backup folder.

    Attributes:
        archive_count: Number of archives found
        total_size_bytes: Combined size of all archives
        sample_archive: Name of the archive the extension sample comes from
        extension_counts: Most common file extensions in the sample archive,
            most frequent first
    """
    archive_count: int
    total_size_bytes: int
    sample_archive: Optional[str] = None
    extension_counts: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def total_size_gb(self) -> float:
        return self.total_size_bytes / BYTES_PER_GB


def sample_extensions(archive: ArchiveRef, top_n: int = DEFAULT_TOP_EXTENSIONS) -> List[Tuple[str, int]]:
    """Count file extensions (lowercase, without dot) inside one archive.

    Raises:
        One of ARCHIVE_OPEN_ERRORS: If the archive cannot be opened
    """
    counts: Counter = Counter()
    with open_archive(archive) as reader:
        for entry in reader.entries():
            if entry.is_dir:
                continue
            suffix = PurePosixPath(normalize_entry_path(entry.name)).suffix
            if suffix:
                counts[suffix[1:].lower()] += 1
    return counts.most_common(top_n)


def analyze(archives: Sequence[ArchiveRef], top_n: int = DEFAULT_TOP_EXTENSIONS) -> BackupAnalysis:
    """Summarize discovered archives.

    The extension sample is taken from the first archive only; an archive
    that cannot be read leaves the sample empty.

    Args:
        archives: Archives in processing order
        top_n: Number of extensions to keep

    Returns:
        Backup analysis
    """
    total_size = sum(a.size_bytes for a in archives)

    if not archives:
        return BackupAnalysis(archive_count=0, total_size_bytes=0)

    first = archives[0]
    try:
        extensions = sample_extensions(first, top_n)
    except ARCHIVE_OPEN_ERRORS as e:
        logger.warning(f"Cannot sample {first.display_name}: {e}")
        return BackupAnalysis(archive_count=len(archives), total_size_bytes=total_size)

    return BackupAnalysis(
        archive_count=len(archives),
        total_size_bytes=total_size,
        sample_archive=first.display_name,
        extension_counts=extensions,
    )
