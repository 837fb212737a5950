"""Archive discovery for backup folders."""

import logging
import os
from pathlib import Path
from typing import List, Set, Tuple

from .archives import ArchiveRef, detect_format
from .errors import SourceReadError
from .natural_order import natural_sorted

logger = logging.getLogger(__name__)


class ArchiveDiscovery:
    """Discovers archives below a source directory, at any depth."""

    def __init__(self, source_dir: Path, follow_symlinks: bool = False):
        """Initialize archive discovery.

        Args:
            source_dir: Directory to search for archives
            follow_symlinks: Descend into symlinked directories; each real
                directory is still listed only once
        """
        self.source_dir = Path(source_dir)
        self.follow_symlinks = follow_symlinks

    def discover(self) -> List[ArchiveRef]:
        """Discover all supported archives below the source directory.

        A missing source directory (or a path that is not a directory) is not
        an error here and yields no archives.

        Returns:
            Archives in natural order of their full path

        Raises:
            SourceReadError: If any directory in the tree cannot be listed
        """
        if not self.source_dir.is_dir():
            logger.info(f"Source directory not found: {self.source_dir}")
            return []

        archives: List[ArchiveRef] = []
        pending: List[Path] = [self.source_dir]
        visited: Set[Tuple[int, int]] = set()

        while pending:
            directory = pending.pop()
            try:
                if self.follow_symlinks and not self._first_visit(directory, visited):
                    logger.debug(f"Already visited, skipping: {directory}")
                    continue

                with os.scandir(directory) as it:
                    for entry in it:
                        if entry.is_dir(follow_symlinks=self.follow_symlinks):
                            pending.append(Path(entry.path))
                        elif entry.is_file():
                            archive = self._to_archive(entry)
                            if archive:
                                archives.append(archive)
            except OSError as e:
                raise SourceReadError(
                    f"Cannot read directory {directory}: {e}",
                    path=str(directory),
                ) from e

        archives = natural_sorted(archives, key=lambda a: str(a.path))

        logger.info(f"Discovered {len(archives)} archive(s) in {self.source_dir}")
        return archives

    @staticmethod
    def _first_visit(directory: Path, visited: Set[Tuple[int, int]]) -> bool:
        stat = os.stat(directory)
        key = (stat.st_dev, stat.st_ino)
        if key in visited:
            return False
        visited.add(key)
        return True

    def _to_archive(self, entry: os.DirEntry) -> ArchiveRef | None:
        archive_format = detect_format(entry.name)
        if archive_format is None:
            return None

        try:
            size_bytes = entry.stat().st_size
        except OSError as e:
            logger.warning(f"Cannot stat {entry.path}: {e}")
            size_bytes = 0

        archive = ArchiveRef(
            path=Path(entry.path),
            format=archive_format,
            size_bytes=size_bytes,
            source_root=self.source_dir,
        )
        logger.debug(f"Discovered archive: {archive}")
        return archive


def locate(source_dir: Path, follow_symlinks: bool = False) -> List[ArchiveRef]:
    """Find all archives below source_dir, in natural order.

    Symlinked directories are skipped unless follow_symlinks is set.

    Raises:
        SourceReadError: If a directory below source_dir cannot be listed
    """
    return ArchiveDiscovery(source_dir, follow_symlinks).discover()
