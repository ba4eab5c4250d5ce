"""Retrieval and parsing of the daily predictions file."""

from propstradamus.ingestion.csv_parser import parse_predictions_csv
from propstradamus.ingestion.predictions import (
    fetch_predictions_text,
    fetch_predictions_text_async,
    predictions_path_for,
    resolve_run_date,
)

__all__ = [
    "parse_predictions_csv",
    "fetch_predictions_text",
    "fetch_predictions_text_async",
    "predictions_path_for",
    "resolve_run_date",
]
