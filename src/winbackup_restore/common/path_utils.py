"""Path utilities for archive entry names."""

# Length of a "C/" style drive segment
_DRIVE_PREFIX_LEN = 2


def _is_ascii_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def normalize_entry_path(name: str) -> str:
    """
    Normalize an archive entry name into a destination-relative path.

    Applies:
    - Backslash to forward slash conversion (Windows backups store either)
    - Removal of a leading single-letter drive segment, so content backed up
      from different volumes merges into one tree instead of creating
      "C", "D", ... top-level folders

    Nothing else is rewritten: parent references ("..") and empty segments
    are passed through untouched.

    Args:
        name: Raw entry name as stored in the archive

    Returns:
        Normalized path string with forward slashes

    Examples:
        >>> normalize_entry_path("C\\\\Users\\\\x.txt")
        'Users/x.txt'
        >>> normalize_entry_path("Documents/x.txt")
        'Documents/x.txt'
    """
    normalized = name.replace('\\', '/')

    if (
        len(normalized) >= _DRIVE_PREFIX_LEN
        and _is_ascii_letter(normalized[0])
        and normalized[1] == '/'
    ):
        normalized = normalized[_DRIVE_PREFIX_LEN:]

    return normalized
