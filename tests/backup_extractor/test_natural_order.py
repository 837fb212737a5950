"""Tests for natural ordering of archive names."""

import itertools
import random

import pytest
from winbackup_restore.backup_extractor.natural_order import (
    compare_natural,
    natural_sort_key,
    natural_sorted,
)


class TestCompareNatural:
    """Test the natural order comparator."""

    def test_numeric_suffixes_sort_by_value(self):
        """Test that part10 sorts after part2."""
        assert sorted(["part2", "part10", "part1"], key=natural_sort_key) == ["part1", "part2", "part10"]

    def test_zero_padding_tie_break(self):
        """Test that more zero padding sorts later for equal values."""
        assert compare_natural("file7", "file007") == -1
        assert compare_natural("file007", "file7") == 1
        assert compare_natural("file007", "file8") == -1
        assert sorted(["file8", "file007", "file7"], key=natural_sort_key) == ["file7", "file007", "file8"]

    def test_case_insensitive(self):
        """Test that letters compare without case."""
        assert compare_natural("Backup.ZIP", "backup.zip") == 0
        assert compare_natural("ABC", "abd") == -1

    def test_shorter_string_first(self):
        """Test that a prefix sorts before the longer string."""
        assert compare_natural("backup", "backup1") == -1
        assert compare_natural("backup1", "backup") == 1

    def test_equal_strings(self):
        """Test that identical strings compare equal."""
        assert compare_natural("", "") == 0
        assert compare_natural("a1b2", "a1b2") == 0

    def test_digit_against_letter(self):
        """Test that a digit and a letter compare as characters."""
        # '1' (0x31) < 'a' (0x61)
        assert compare_natural("1", "a") == -1
        assert compare_natural("x9", "xa") == -1

    def test_large_numbers(self):
        """Test runs larger than any machine integer."""
        small = "part" + "9" * 30
        big = "part1" + "0" * 30
        assert compare_natural(small, big) == -1

    def test_multiple_runs(self):
        """Test that later digit runs decide when earlier ones tie."""
        names = ["Backup 2/part10.zip", "Backup 10/part1.zip", "Backup 2/part9.zip"]
        assert natural_sorted(names) == ["Backup 2/part9.zip", "Backup 2/part10.zip", "Backup 10/part1.zip"]

    def test_all_zeros(self):
        """Test runs that are only zeros."""
        assert compare_natural("v0", "v00") == -1
        assert compare_natural("v00", "v1") == -1

    def test_non_ascii_digits_are_not_numbers(self):
        """Test that only ASCII digits form numeric runs."""
        # Arabic-indic digits compare as plain characters
        assert compare_natural("a٢", "a١٠") == 1

    @pytest.mark.parametrize("seed", range(5))
    def test_total_order_properties(self, seed):
        """Test antisymmetry and transitivity over generated names."""
        rng = random.Random(seed)
        alphabet = "aAb0019_ ."
        names = ["".join(rng.choice(alphabet) for _ in range(rng.randint(0, 6))) for _ in range(25)]

        for a, b in itertools.product(names, repeat=2):
            assert compare_natural(a, b) == -compare_natural(b, a)

        for a, b, c in itertools.product(names[:12], repeat=3):
            if compare_natural(a, b) <= 0 and compare_natural(b, c) <= 0:
                assert compare_natural(a, c) <= 0


class TestNaturalSorted:
    """Test the sorting helper."""

    def test_stable_for_equivalent_keys(self):
        """Test that equivalent keys keep their input order."""
        items = [("B.zip", 1), ("b.zip", 2), ("a.zip", 3), ("B.ZIP", 4)]
        result = natural_sorted(items, key=lambda item: item[0])
        assert [n for _, n in result] == [3, 1, 2, 4]

    def test_windows_backup_set(self):
        """Test a typical multi-part backup set."""
        names = [f"Backup files {i}.zip" for i in (11, 2, 1, 10, 3)]
        assert natural_sorted(names) == [f"Backup files {i}.zip" for i in (1, 2, 3, 10, 11)]
