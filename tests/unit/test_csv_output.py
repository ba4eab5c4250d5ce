"""Unit tests for the CSV export of a selection."""

import csv

import numpy as np

from propstradamus.ingestion import parse_predictions_csv
from propstradamus.models.selection import SelectionResult, select_picks
from propstradamus.normalization import validate_rows
from propstradamus.reporting import selection_rows, write_picks_csv


def test_write_picks_csv(tmp_path, sample_csv):
    result = select_picks(validate_rows(parse_predictions_csv(sample_csv)), rng=np.random.default_rng(1))
    path = write_picks_csv(result, str(tmp_path / "out" / "picks.csv"))

    with open(path, encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))

    assert [row["slot"] for row in rows] == ["headline", "runner_up_1", "runner_up_2", "runner_up_3"]
    assert rows[0]["player_name"] in {"Nikola Jokic", "Tyrese Haliburton"}
    assert rows[1]["player_name"] == "Nikola Jokic"
    assert rows[1]["prop_type"] == "POINTS ASSISTS REBOUNDS"
    assert rows[1]["confidence_percent"] == ""


def test_empty_selection_writes_header_only(tmp_path):
    result = SelectionResult(headline=None, runners_up=[], ranked=[])
    assert selection_rows(result) == []
    path = write_picks_csv(result, str(tmp_path / "picks.csv"))
    lines = open(path, encoding="utf-8").read().splitlines()
    assert lines == [
        "slot,player_name,prop_type,line,xgboost,xgboost_rf,catboost,adv_nn,xgb_reg,xgb_rf_reg,confidence_percent"
    ]
