"""CSV export of a selection."""

from typing import Dict, List
from pathlib import Path
import csv

from propstradamus.models.selection import SelectionResult

_FIELDNAMES = [
    "slot",
    "player_name",
    "prop_type",
    "line",
    "xgboost",
    "xgboost_rf",
    "catboost",
    "adv_nn",
    "xgb_reg",
    "xgb_rf_reg",
    "confidence_percent",
]


def selection_rows(result: SelectionResult) -> List[Dict]:
    """Headline first, then runners-up in rank order."""
    rows: List[Dict] = []
    if result.headline is not None:
        rows.append({"slot": "headline", **result.headline.to_dict()})
    for idx, pick in enumerate(result.runners_up, start=1):
        rows.append({"slot": f"runner_up_{idx}", **pick.to_dict()})
    return rows


def write_picks_csv(result: SelectionResult, output_path: str) -> str:
    """Write the selection to CSV; an empty selection writes just the header."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=_FIELDNAMES, restval="")
        writer.writeheader()
        writer.writerows(selection_rows(result))
    return str(path)
