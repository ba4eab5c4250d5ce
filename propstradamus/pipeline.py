"""Fetch -> parse -> validate -> select for one prediction cycle."""

from typing import Any, Dict, Mapping, Optional, Sequence
import asyncio
import logging

import aiohttp
import numpy as np
import requests

from propstradamus.config import Config
from propstradamus.constants import DEFAULT_SURPLUS_SIZE
from propstradamus.exceptions import EmptyResultError
from propstradamus.ingestion import (
    fetch_predictions_text,
    fetch_predictions_text_async,
    parse_predictions_csv,
    predictions_path_for,
)
from propstradamus.models.selection import (
    ConfidenceThresholds,
    DEFAULT_THRESHOLDS,
    SelectionResult,
    select_picks,
)
from propstradamus.normalization import validate_rows

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def run_selection(
    rows: Sequence[Mapping[str, Any]],
    rng: Optional[np.random.Generator] = None,
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
    surplus_size: int = DEFAULT_SURPLUS_SIZE,
    source: Optional[str] = None,
) -> SelectionResult:
    """Select picks from parsed CSV rows.

    Raises EmptyResultError when the file held no rows at all. Rows that exist
    but fail validation produce an empty SelectionResult instead.
    """
    if not rows:
        raise EmptyResultError(source)
    records = validate_rows(rows)
    logger.info("Validated %d of %d rows", len(records), len(rows))
    return select_picks(records, rng=rng, thresholds=thresholds, surplus_size=surplus_size)


def _selection_kwargs(config: Config, rng: Optional[np.random.Generator]) -> Dict[str, Any]:
    return {
        "rng": rng if rng is not None else make_rng(config.random_seed),
        "thresholds": config.thresholds(),
        "surplus_size": config.surplus_size,
        "source": predictions_path_for(config.run_date or None),
    }


def fetch_and_select(
    config: Config,
    rng: Optional[np.random.Generator] = None,
    session: Optional[requests.Session] = None,
) -> SelectionResult:
    text = fetch_predictions_text(
        config.base_url,
        config.run_date or None,
        timeout=config.http_timeout,
        session=session,
    )
    rows = parse_predictions_csv(text)
    return run_selection(rows, **_selection_kwargs(config, rng))


async def fetch_and_select_async(
    config: Config,
    rng: Optional[np.random.Generator] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> SelectionResult:
    text = await fetch_predictions_text_async(
        config.base_url,
        config.run_date or None,
        timeout=config.http_timeout,
        session=session,
    )
    rows = await asyncio.to_thread(parse_predictions_csv, text)
    return run_selection(rows, **_selection_kwargs(config, rng))
