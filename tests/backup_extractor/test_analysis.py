"""Tests for backup folder analysis."""

import zipfile
from pathlib import Path

import pytest
from winbackup_restore.backup_extractor.analysis import BYTES_PER_GB, BackupAnalysis, analyze, sample_extensions
from winbackup_restore.backup_extractor.archives import ArchiveFormat, ArchiveRef


def _make_zip(path: Path, names) -> ArchiveRef:
    with zipfile.ZipFile(path, 'w') as zf:
        for name in names:
            zf.writestr(name, "" if name.endswith(("/", "\\")) else "x")
    return ArchiveRef(path=path, format=ArchiveFormat.ZIP, size_bytes=path.stat().st_size)


class TestSampleExtensions:
    """Test extension counting."""

    def test_counts_lowercase_extensions(self, tmp_path):
        archive = _make_zip(tmp_path / "a.zip", [
            "C/Pictures/",
            "C/Pictures/a.JPG",
            "C/Pictures/b.jpg",
            "C\\Pictures\\c.jpg",
            "C/Docs/report.pdf",
            "C/Docs/Makefile",
        ])

        assert sample_extensions(archive) == [("jpg", 3), ("pdf", 1)]

    def test_backslash_directories_not_counted(self, tmp_path):
        archive = _make_zip(tmp_path / "a.zip", ["C\\my.folder\\", "C\\my.folder\\a.txt"])

        assert sample_extensions(archive) == [("txt", 1)]

    def test_top_n_limit(self, tmp_path):
        archive = _make_zip(tmp_path / "a.zip", ["a.txt", "b.txt", "c.png", "d.gif"])

        assert sample_extensions(archive, top_n=1) == [("txt", 2)]

    def test_dotted_directory_not_an_extension(self, tmp_path):
        archive = _make_zip(tmp_path / "a.zip", ["C/my.folder/README"])

        assert sample_extensions(archive) == []


class TestAnalyze:
    """Test analyze()."""

    def test_no_archives(self):
        analysis = analyze([])

        assert analysis == BackupAnalysis(archive_count=0, total_size_bytes=0)
        assert analysis.sample_archive is None

    def test_totals_and_first_archive_sample(self, tmp_path):
        first = _make_zip(tmp_path / "Backup files 1.zip", ["a.txt"])
        second = _make_zip(tmp_path / "Backup files 2.zip", ["b.png", "c.png"])

        analysis = analyze([first, second])

        assert analysis.archive_count == 2
        assert analysis.total_size_bytes == first.size_bytes + second.size_bytes
        assert analysis.sample_archive == "Backup files 1.zip"
        assert analysis.extension_counts == [("txt", 1)]

    def test_unreadable_first_archive(self, tmp_path):
        """Test that a corrupt sample archive leaves the sample empty."""
        broken = tmp_path / "broken.zip"
        broken.write_bytes(b"not a zip")
        ref = ArchiveRef(path=broken, format=ArchiveFormat.ZIP, size_bytes=9)

        analysis = analyze([ref])

        assert analysis.archive_count == 1
        assert analysis.total_size_bytes == 9
        assert analysis.sample_archive is None
        assert analysis.extension_counts == []

    def test_total_size_gb(self):
        analysis = BackupAnalysis(archive_count=1, total_size_bytes=3 * BYTES_PER_GB // 2)

        assert analysis.total_size_gb == pytest.approx(1.5)
