"""Read-only access to ZIP and TAR archives.

Each supported format is wrapped in an ArchiveReader that exposes the
archive index as a sequence of ArchiveEntry records, so the extraction loop
does not need to know which module backs a given archive.
"""

import logging
import lzma
import tarfile
import zipfile
import zlib
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, List, Optional

from .errors import ArchiveError, UnsupportedArchiveError

logger = logging.getLogger(__name__)

# Everything zipfile, tarfile and their decompressors raise for unreadable data
ARCHIVE_READ_ERRORS = (
    OSError,
    EOFError,
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    tarfile.TarError,
    zlib.error,
    lzma.LZMAError,
    NotImplementedError,  # unsupported ZIP compression method
    RuntimeError,  # encrypted ZIP entry without password
)

# Failures of open_archive()
ARCHIVE_OPEN_ERRORS = (ArchiveError,) + ARCHIVE_READ_ERRORS


class ArchiveFormat(Enum):
    """Supported archive formats."""
    ZIP = "zip"
    TAR = "tar"
    TAR_GZ = "tar.gz"
    TAR_BZ2 = "tar.bz2"
    TGZ = "tgz"
    TBZ2 = "tbz2"


# Map file extensions to archive formats
EXTENSION_MAP = {
    '.zip': ArchiveFormat.ZIP,
    '.tar': ArchiveFormat.TAR,
    '.tar.gz': ArchiveFormat.TAR_GZ,
    '.tgz': ArchiveFormat.TGZ,
    '.tar.bz2': ArchiveFormat.TAR_BZ2,
    '.tbz2': ArchiveFormat.TBZ2,
}


def detect_format(filename: str) -> Optional[ArchiveFormat]:
    """Detect archive format from a file name (case-insensitive).

    Args:
        filename: File name or path

    Returns:
        Archive format or None if not supported
    """
    lowered = filename.lower()
    for ext, fmt in EXTENSION_MAP.items():
        if lowered.endswith(ext):
            return fmt
    return None


@dataclass(frozen=True)
class ArchiveRef:
    """A discovered archive file.

    Attributes:
        path: Location of the archive file
        format: Detected archive format
        size_bytes: File size at discovery time
        source_root: Folder the archive was discovered under, if any
    """
    path: Path
    format: ArchiveFormat
    size_bytes: int = 0
    source_root: Optional[Path] = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def display_name(self) -> str:
        """Path relative to the source root, or the file name.

        Backup sets often repeat the same file name in several subfolders,
        so errors and summaries use this to tell them apart.
        """
        if self.source_root is not None:
            try:
                return self.path.relative_to(self.source_root).as_posix()
            except ValueError:
                pass
        return self.name

    def __str__(self) -> str:
        size_mb = self.size_bytes / (1024 * 1024)
        return f"{self.display_name} ({self.format.value}, {size_mb:.2f} MB)"


@dataclass(frozen=True)
class ArchiveEntry:
    """One record of an archive index.

    Attributes:
        name: Raw entry name, with whatever separators the archive uses
        is_dir: Whether the entry is a directory
        index: Position in the archive index (0-based)
    """
    name: str
    is_dir: bool
    index: int
    _opener: Callable[[], BinaryIO] = field(repr=False, compare=False)

    def open(self) -> BinaryIO:
        """Open a binary stream over the entry content."""
        return self._opener()


class ArchiveReader:
    """Base class for open archives; use as a context manager."""

    def __init__(self, archive: ArchiveRef) -> None:
        self.archive = archive

    def entries(self) -> Iterator[ArchiveEntry]:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ZipArchiveReader(ArchiveReader):
    """Reader for ZIP archives; the central directory is read on open."""

    def __init__(self, archive: ArchiveRef) -> None:
        super().__init__(archive)
        self._zip = zipfile.ZipFile(archive.path, 'r')

    def entries(self) -> Iterator[ArchiveEntry]:
        for index, info in enumerate(self._zip.infolist()):
            # zipfile keeps '\' as-is outside Windows, so C\Users\ must be caught here
            yield ArchiveEntry(
                name=info.filename,
                is_dir=info.is_dir() or info.filename.endswith('\\'),
                index=index,
                _opener=partial(self._zip.open, info),
            )

    def close(self) -> None:
        self._zip.close()


class TarArchiveReader(ArchiveReader):
    """Reader for TAR archives, plain or compressed.

    The whole member list is read on open so a truncated or corrupt archive
    fails before any file is written. Only directories and regular files
    are reported; links and device nodes are skipped.
    """

    MODES = {
        ArchiveFormat.TAR: 'r:',
        ArchiveFormat.TAR_GZ: 'r:gz',
        ArchiveFormat.TGZ: 'r:gz',
        ArchiveFormat.TAR_BZ2: 'r:bz2',
        ArchiveFormat.TBZ2: 'r:bz2',
    }

    def __init__(self, archive: ArchiveRef) -> None:
        super().__init__(archive)
        self._tar = tarfile.open(archive.path, self.MODES[archive.format])
        try:
            self._members: List[tarfile.TarInfo] = self._tar.getmembers()
        except BaseException:
            self._tar.close()
            raise

    def entries(self) -> Iterator[ArchiveEntry]:
        for index, member in enumerate(self._members):
            if not (member.isdir() or member.isfile()):
                logger.debug(f"Skipping non-regular member: {member.name}")
                continue
            yield ArchiveEntry(
                name=member.name,
                is_dir=member.isdir(),
                index=index,
                _opener=partial(self._tar.extractfile, member),
            )

    def close(self) -> None:
        self._tar.close()


def open_archive(archive: ArchiveRef) -> ArchiveReader:
    """Open an archive and read its index.

    Args:
        archive: Archive to open

    Returns:
        Reader for the archive; the caller closes it

    Raises:
        UnsupportedArchiveError: If the format has no reader
        One of ARCHIVE_READ_ERRORS: If the file is unreadable or corrupt
    """
    if archive.format is ArchiveFormat.ZIP:
        return ZipArchiveReader(archive)
    if archive.format in TarArchiveReader.MODES:
        return TarArchiveReader(archive)
    raise UnsupportedArchiveError(
        f"Unsupported archive format: {archive.format}",
        archive=str(archive.path),
    )
