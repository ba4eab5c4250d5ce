"""Row validation into typed prop records."""

from propstradamus.normalization.records import PropRecord, validate_row, validate_rows

__all__ = ["PropRecord", "validate_row", "validate_rows"]
