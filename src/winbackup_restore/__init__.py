"""Restore Windows backup archives into a single folder tree."""

__version__ = "0.1.0"
