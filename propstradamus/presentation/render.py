"""Plain-text rendering of the loading sequence and the result card."""

from typing import List
import math

from propstradamus.constants import EMPTY_MESSAGE, LOADING_MESSAGE, PROGRESS_COMPLETE
from propstradamus.models.selection import Headline, RunnerUp
from propstradamus.presentation.controller import PresentationState, ViewKind

TITLE = "PROPSTRADAMUS"
SUBTITLE = "POWERED BY ADVANCED MACHINE LEARNING"
BAR_WIDTH = 30


def _pct(value: float) -> str:
    if value is None or math.isnan(value):
        return "N/A"
    return f"{value * 100:.1f}%"


def _reg(value: float) -> str:
    if value is None or math.isnan(value):
        return "N/A"
    return f"{value:.2f}"


def format_line(line: float) -> str:
    return f"{line:g}"


def render_progress(state: PresentationState, width: int = BAR_WIDTH) -> str:
    filled = int(width * state.progress / PROGRESS_COMPLETE)
    bar = "#" * filled + "." * (width - filled)
    return f"{state.stage_name:<26} [{bar}] {state.progress:>3}% COMPLETE"


def render_headline(headline: Headline) -> List[str]:
    models = [
        ("XGBOOST", _pct(headline.xgboost)),
        ("XGBOOST RF", _pct(headline.xgboost_rf)),
        ("CATBOOST", _pct(headline.catboost)),
        ("ADVANCED NN", _pct(headline.adv_nn)),
        ("XGB REG", _reg(headline.xgb_reg)),
        ("XGB RF REG", _reg(headline.xgb_rf_reg)),
    ]
    title = (
        "HIGH CONFIDENCE PICK IDENTIFIED"
        if headline.high_confidence
        else "TOP MODEL PICK IDENTIFIED"
    )
    confidence = "N/A" if headline.confidence_percent is None else f"{headline.confidence_percent}%"
    lines = [
        title,
        "",
        "PLAYER",
        f"  {headline.player_name}",
        "PREDICTION",
        f"  OVER {format_line(headline.line)} {headline.prop_type}",
        "",
    ]
    for left, right in zip(models[0::2], models[1::2]):
        lines.append(f"  {left[0]:<12}{left[1]:>8}    {right[0]:<12}{right[1]:>8}")
    lines.extend(["", f"AI CONFIDENCE: {confidence}"])
    return lines


def render_runners_up(runners_up: List[RunnerUp]) -> List[str]:
    lines = ["ADDITIONAL HIGH CONFIDENCE PICKS"]
    for pick in runners_up:
        label = f"{pick.player_name} {pick.prop_type} O{format_line(pick.line)}"
        lines.append(f"  {label:<48}{_pct(pick.xgboost):>8}")
    return lines


def render_view(view: ViewKind, state: PresentationState) -> str:
    """Text for the view the controller reports. One kind, one block."""
    header = [TITLE, SUBTITLE, ""]
    if view is ViewKind.ANALYZING:
        body = [render_progress(state), "", "PROCESSING MULTI-MODEL PREDICTION SYSTEM"]
    elif view is ViewKind.LOADING:
        body = [LOADING_MESSAGE]
    elif view is ViewKind.ERROR:
        body = [state.error or ""]
    elif view is ViewKind.HEADLINE:
        result = state.result
        body = render_headline(result.headline) + [""] + render_runners_up(result.runners_up)
    else:
        body = [EMPTY_MESSAGE]
    return "\n".join(header + body)
