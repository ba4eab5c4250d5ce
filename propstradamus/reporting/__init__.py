"""Result exports."""

from propstradamus.reporting.csv_output import selection_rows, write_picks_csv

__all__ = ["selection_rows", "write_picks_csv"]
