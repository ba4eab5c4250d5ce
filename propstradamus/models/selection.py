"""Headline and runner-up selection.

The headline is drawn at random from the high-confidence picks so that
repeated runs surface different picks on days with several strong
candidates. When nothing clears the bar, the top xgboost score is used.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence
import logging
import math

import numpy as np

from propstradamus.constants import (
    DEFAULT_ALLOWED_PROP_TYPES,
    DEFAULT_MIN_ADV_NN,
    DEFAULT_MIN_XGBOOST,
    DEFAULT_MIN_XGBOOST_RF,
    DEFAULT_REQUIRED_CATBOOST,
    DEFAULT_SURPLUS_SIZE,
)
from propstradamus.normalization.records import PropRecord
from propstradamus.ops import get_metrics_recorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfidenceThresholds:
    """Multi-model agreement rule. All score comparisons are strict."""
    allowed_prop_types: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_ALLOWED_PROP_TYPES)
    )
    min_xgboost: float = DEFAULT_MIN_XGBOOST
    min_xgboost_rf: float = DEFAULT_MIN_XGBOOST_RF
    required_catboost: float = DEFAULT_REQUIRED_CATBOOST
    min_adv_nn: float = DEFAULT_MIN_ADV_NN


DEFAULT_THRESHOLDS = ConfidenceThresholds()


@dataclass(frozen=True)
class Headline:
    player_name: str
    prop_type: str
    line: float
    xgboost: float
    xgboost_rf: float
    catboost: float
    adv_nn: float
    xgb_reg: float
    xgb_rf_reg: float
    confidence_percent: Optional[int]
    high_confidence: bool

    @classmethod
    def from_record(cls, record: PropRecord, high_confidence: bool) -> "Headline":
        shown = record.for_display()
        return cls(
            player_name=shown.player_name,
            prop_type=shown.prop_type,
            line=shown.line,
            xgboost=shown.xgboost,
            xgboost_rf=shown.xgboost_rf,
            catboost=shown.catboost,
            adv_nn=shown.adv_nn,
            xgb_reg=shown.xgb_reg,
            xgb_rf_reg=shown.xgb_rf_reg,
            confidence_percent=confidence_percent(record.xgboost),
            high_confidence=high_confidence,
        )

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
            "confidence_percent": self.confidence_percent,
        }


@dataclass(frozen=True)
class RunnerUp:
    player_name: str
    prop_type: str
    line: float
    xgboost: float

    @classmethod
    def from_record(cls, record: PropRecord) -> "RunnerUp":
        shown = record.for_display()
        return cls(
            player_name=shown.player_name,
            prop_type=shown.prop_type,
            line=shown.line,
            xgboost=shown.xgboost,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_name": self.player_name,
            "prop_type": self.prop_type,
            "line": self.line,
            "xgboost": self.xgboost,
        }


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one selection. ``headline`` is None when no record was valid."""
    headline: Optional[Headline]
    runners_up: List[RunnerUp]
    ranked: List[PropRecord]
    high_confidence_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.headline is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headline": self.headline.to_dict() if self.headline else None,
            "runners_up": [pick.to_dict() for pick in self.runners_up],
        }


def confidence_percent(score: float) -> Optional[int]:
    """Score as a whole percent, rounding halves up."""
    if score is None or math.isnan(score):
        return None
    return int(math.floor(score * 100 + 0.5))


def is_high_confidence(
    record: PropRecord,
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    # NaN fails every comparison below, so incomplete rows never qualify.
    return (
        record.prop_type in thresholds.allowed_prop_types
        and record.xgboost > thresholds.min_xgboost
        and record.xgboost_rf > thresholds.min_xgboost_rf
        and record.catboost == thresholds.required_catboost
        and record.adv_nn > thresholds.min_adv_nn
        and record.xgb_reg > record.line
        and record.xgb_rf_reg > record.line
    )


def filter_high_confidence(
    records: Iterable[PropRecord],
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
) -> List[PropRecord]:
    """High-confidence subset, in input order."""
    return [record for record in records if is_high_confidence(record, thresholds)]


def _rank_key(record: PropRecord):
    score = record.xgboost
    if math.isnan(score):
        return (1, 0.0)
    return (0, -score)


def rank_by_score(records: Iterable[PropRecord]) -> List[PropRecord]:
    """Sort by xgboost descending.

    The sort is stable, so equal scores keep their input order. Records with
    no xgboost score go last.
    """
    return sorted(records, key=_rank_key)


def select_picks(
    records: Sequence[PropRecord],
    rng: Optional[np.random.Generator] = None,
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
    surplus_size: int = DEFAULT_SURPLUS_SIZE,
) -> SelectionResult:
    """Choose the headline pick and the runners-up.

    Runners-up are ranks 1..surplus_size of the full ranking and are not
    deduplicated against the headline, so a randomly drawn headline can also
    appear in the list.
    """
    rng = rng if rng is not None else np.random.default_rng()
    high_confidence = filter_high_confidence(records, thresholds)
    ranked = rank_by_score(records)
    get_metrics_recorder().increment("high_confidence", len(high_confidence))

    if not ranked:
        logger.info("No valid records; nothing to select")
        return SelectionResult(headline=None, runners_up=[], ranked=[])

    if high_confidence:
        index = int(rng.integers(len(high_confidence)))
        chosen = high_confidence[index]
        logger.info(
            "Drew high-confidence pick %d of %d: %s %s",
            index + 1,
            len(high_confidence),
            chosen.player_name,
            chosen.prop_type,
        )
    else:
        chosen = ranked[0]
        logger.info(
            "No high-confidence picks; falling back to top xgboost %s %s",
            chosen.player_name,
            chosen.prop_type,
        )

    runners_up = [RunnerUp.from_record(record) for record in ranked[1:1 + surplus_size]]
    return SelectionResult(
        headline=Headline.from_record(chosen, high_confidence=bool(high_confidence)),
        runners_up=runners_up,
        ranked=ranked,
        high_confidence_count=len(high_confidence),
    )
