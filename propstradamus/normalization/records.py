"""Validation of parsed CSV rows into typed prop records."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging
import math

from propstradamus.constants import (
    COL_ADV_NN,
    COL_CATBOOST,
    COL_LINE,
    COL_PLAYER_NAME,
    COL_PROP_TYPE,
    COL_XGB_REG,
    COL_XGB_RF_REG,
    COL_XGBOOST,
    COL_XGBOOST_RF,
)
from propstradamus.ops import get_metrics_recorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropRecord:
    """One model-scored prediction for one player prop on one date.

    Score fields are NaN when the CSV cell was missing or not numeric, so
    every threshold comparison on them is false.
    """
    player_name: str
    prop_type: str
    line: float
    xgboost: float = math.nan
    xgboost_rf: float = math.nan
    catboost: float = math.nan
    adv_nn: float = math.nan
    xgb_reg: float = math.nan
    xgb_rf_reg: float = math.nan

    def for_display(self) -> "PropRecord":
        """Copy with the prop type upper-cased for rendering."""
        return replace(self, prop_type=self.prop_type.upper())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_name": self.player_name,
            "prop_type": self.prop_type,
            "line": self.line,
            "xgboost": self.xgboost,
            "xgboost_rf": self.xgboost_rf,
            "catboost": self.catboost,
            "adv_nn": self.adv_nn,
            "xgb_reg": self.xgb_reg,
            "xgb_rf_reg": self.xgb_rf_reg,
        }


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _coerce_score(value: Any) -> float:
    if _is_missing(value) or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _coerce_text(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    text = str(value)
    return text if text != "" else None


def validate_row(row: Mapping[str, Any]) -> Optional[PropRecord]:
    """Build a PropRecord from one parsed CSV row, or None if it is unusable.

    A row needs a player name, a prop type and a line. Text is kept as read.
    A line of 0 is accepted; a line that is not numeric is kept as NaN, so the
    row can still rank but never passes the confidence filter.
    """
    player_name = _coerce_text(row.get(COL_PLAYER_NAME))
    prop_type = _coerce_text(row.get(COL_PROP_TYPE))
    if player_name is None or prop_type is None:
        return None
    raw_line = row.get(COL_LINE)
    if _is_missing(raw_line):
        return None
    line = _coerce_score(raw_line)

    return PropRecord(
        player_name=player_name,
        prop_type=prop_type,
        line=line,
        xgboost=_coerce_score(row.get(COL_XGBOOST)),
        xgboost_rf=_coerce_score(row.get(COL_XGBOOST_RF)),
        catboost=_coerce_score(row.get(COL_CATBOOST)),
        adv_nn=_coerce_score(row.get(COL_ADV_NN)),
        xgb_reg=_coerce_score(row.get(COL_XGB_REG)),
        xgb_rf_reg=_coerce_score(row.get(COL_XGB_RF_REG)),
    )


def validate_rows(rows: Iterable[Mapping[str, Any]]) -> List[PropRecord]:
    """Validate rows in order, silently dropping the ones that fail."""
    metrics = get_metrics_recorder()
    records: List[PropRecord] = []
    dropped = 0
    for idx, row in enumerate(rows):
        record = validate_row(row)
        if record is None:
            dropped += 1
            logger.debug("Dropping row %d: missing player, prop type or line", idx)
            continue
        records.append(record)
    metrics.increment("rows_valid", len(records))
    metrics.increment("rows_dropped", dropped)
    return records
