"""Allow running as ``python -m winbackup_restore``."""

import sys

from .backup_extractor.cli import main

if __name__ == "__main__":
    sys.exit(main())
