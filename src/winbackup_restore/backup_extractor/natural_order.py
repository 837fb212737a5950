"""Natural ("human") ordering of archive paths.

Multi-part backups are named "Backup files 1.zip" ... "Backup files 10.zip";
plain string ordering would put part 10 between parts 1 and 2. Digit runs are
therefore compared by value, everything else character by character with
ASCII case folding.
"""

from functools import cmp_to_key
from typing import Callable


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return '0' <= ch <= '9'


def _fold(ch: str) -> str:
    if 'A' <= ch <= 'Z':
        return chr(ord(ch) + 32)
    return ch


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _digit_run_end(s: str, start: int) -> int:
    end = start
    while end < len(s) and _is_digit(s[end]):
        end += 1
    return end


def _compare_digit_runs(a_run: str, b_run: str) -> int:
    """Compare two digit runs by value, then by amount of zero padding.

    "7" < "007" < "8": equal values with more leading zeros sort later.
    """
    a_trim = a_run.lstrip('0')
    b_trim = b_run.lstrip('0')

    # Same digit count after trimming, so lexical order is numeric order
    result = _cmp(len(a_trim), len(b_trim)) or _cmp(a_trim, b_trim)
    if result:
        return result
    return _cmp(len(a_run), len(b_run))


def compare_natural(a: str, b: str) -> int:
    """Compare two strings in natural order.

    Args:
        a: First string
        b: Second string

    Returns:
        -1 if a sorts before b, 1 if after, 0 if they are equivalent
    """
    ai = 0
    bi = 0

    while ai < len(a) and bi < len(b):
        if _is_digit(a[ai]) and _is_digit(b[bi]):
            a_end = _digit_run_end(a, ai)
            b_end = _digit_run_end(b, bi)
            result = _compare_digit_runs(a[ai:a_end], b[bi:b_end])
            if result:
                return result
            ai = a_end
            bi = b_end
        else:
            result = _cmp(_fold(a[ai]), _fold(b[bi]))
            if result:
                return result
            ai += 1
            bi += 1

    # Shorter string first; with equal lengths the strings are equivalent
    return _cmp(len(a), len(b))


# Usable as sorted(..., key=natural_sort_key)
natural_sort_key = cmp_to_key(compare_natural)


def natural_sorted(items, key: Callable[[object], str] = str) -> list:
    """Return items sorted in natural order of key(item).

    The sort is stable: items with equivalent keys keep their input order.
    """
    return sorted(items, key=lambda item: natural_sort_key(key(item)))

