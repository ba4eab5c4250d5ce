"""
Pytest configuration and shared fixtures for prediction cycle tests.
"""

from pathlib import Path

import pytest

from propstradamus.ops import reset_metrics_recorder

CSV_HEADER = "PLAYER_NAME,Prop_Type,Line,xgboost,xgboost_rf,catboost,Adv_NN,xgb_reg,xgb_rf_reg,Team"


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Each test starts with empty counters."""
    return reset_metrics_recorder()


@pytest.fixture
def make_row():
    """Factory for a raw CSV row that clears every high-confidence threshold."""
    def _make(**overrides):
        row = {
            "PLAYER_NAME": "Domantas Sabonis",
            "Prop_Type": "Rebounds",
            "Line": 12.5,
            "xgboost": 0.72,
            "xgboost_rf": 0.61,
            "catboost": 1,
            "Adv_NN": 0.81,
            "xgb_reg": 13.4,
            "xgb_rf_reg": 13.1,
        }
        row.update(overrides)
        return row
    return _make


@pytest.fixture
def example_rows():
    """Two-row day: A qualifies, B has the top score but a disallowed prop type."""
    return [
        {"PLAYER_NAME": "A", "Prop_Type": "Rebounds", "Line": 8, "xgboost": 0.70,
         "xgboost_rf": 0.60, "catboost": 1, "Adv_NN": 0.75, "xgb_reg": 9, "xgb_rf_reg": 9},
        {"PLAYER_NAME": "B", "Prop_Type": "Points", "Line": 20, "xgboost": 0.90,
         "xgboost_rf": 0.80, "catboost": 1, "Adv_NN": 0.95, "xgb_reg": 25, "xgb_rf_reg": 25},
    ]


@pytest.fixture
def sample_csv():
    return "\n".join([
        CSV_HEADER,
        "Nikola Jokic,Points assists rebounds,48.5,0.78,0.66,1,0.83,51.2,50.7,DEN",
        "Jalen Brunson,Points,27.5,0.91,0.74,1,0.88,30.1,29.6,NYK",
        "Anthony Davis,Rebounds,11.5,0.58,0.52,0,0.61,11.9,11.2,LAL",
        "Tyrese Haliburton,Rebounds assists,14.5,0.69,0.57,1,0.74,15.3,15.0,IND",
        ",Points,20.5,0.99,0.99,1,0.99,30,30,BOS",
        "",
    ])


@pytest.fixture
def predictions_dir(tmp_path, sample_csv):
    """Base directory holding predictions/predictions_2025-03-07.csv."""
    folder = tmp_path / "predictions"
    folder.mkdir()
    (folder / "predictions_2025-03-07.csv").write_text(sample_csv, encoding="utf-8")
    return tmp_path


@pytest.fixture
def write_predictions():
    """Writer for predictions/predictions_<date>.csv under a base directory."""
    def _write(base: Path, date_str: str, text: str) -> Path:
        folder = base / "predictions"
        folder.mkdir(exist_ok=True)
        path = folder / f"predictions_{date_str}.csv"
        path.write_text(text, encoding="utf-8")
        return path
    return _write
