"""Daily predictions file retrieval.

The file is located by date under ``predictions/`` relative to a base that is
either an ``http(s)://`` URL or a local directory. Failures are raised as
FetchError and never retried.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo
import asyncio
import logging
import time

import aiohttp
import requests

from propstradamus.constants import (
    DEFAULT_HTTP_TIMEOUT,
    PREDICTIONS_DIR,
    PREDICTIONS_FILE_TEMPLATE,
    RUN_TIMEZONE,
)
from propstradamus.exceptions import ConfigurationError, FetchError
from propstradamus.ops import get_metrics_recorder

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


def resolve_run_date(run_date: Optional[DateLike] = None) -> date:
    """Date the cycle runs for; today in New York unless overridden."""
    if run_date is None or run_date == "":
        return datetime.now(ZoneInfo(RUN_TIMEZONE)).date()
    if isinstance(run_date, datetime):
        return run_date.date()
    if isinstance(run_date, date):
        return run_date
    try:
        return datetime.strptime(run_date, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ConfigurationError("RUN_DATE", f"expected YYYY-MM-DD, got {run_date!r}") from exc


def predictions_path_for(run_date: Optional[DateLike] = None) -> str:
    """Relative path of the predictions file, e.g. predictions/predictions_2025-03-07.csv."""
    resolved = resolve_run_date(run_date)
    filename = PREDICTIONS_FILE_TEMPLATE.format(date=resolved.strftime("%Y-%m-%d"))
    return f"{PREDICTIONS_DIR}/{filename}"


def _is_http(base: str) -> bool:
    return base.startswith("http://") or base.startswith("https://")


def _join_location(base: str, relative_path: str) -> str:
    if _is_http(base):
        return f"{base.rstrip('/')}/{relative_path}"
    return str(Path(base) / relative_path)


def _read_local(location: str, date_str: str) -> str:
    try:
        return Path(location).read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(date_str, location, exc) from exc


def fetch_predictions_text(
    base: str,
    run_date: Optional[DateLike] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> str:
    """Return the raw CSV text for ``run_date``."""
    resolved = resolve_run_date(run_date)
    date_str = resolved.strftime("%Y-%m-%d")
    location = _join_location(base, predictions_path_for(resolved))
    logger.info("Fetching predictions from %s", location)

    started = time.perf_counter()
    try:
        if not _is_http(base):
            return _read_local(location, date_str)
        http = session or requests.Session()
        try:
            response = http.get(location, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Error loading prediction file %s: %s", location, exc)
            raise FetchError(date_str, location, exc) from exc
        finally:
            if session is None:
                http.close()
        return response.text
    finally:
        get_metrics_recorder().timing("fetch_ms", (time.perf_counter() - started) * 1000)


async def fetch_predictions_text_async(
    base: str,
    run_date: Optional[DateLike] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    session: Optional[aiohttp.ClientSession] = None,
) -> str:
    """Async variant of fetch_predictions_text used by the loading sequence.

    Cancelling the awaiting task aborts the in-flight request; a session
    opened here is closed on the way out.
    """
    resolved = resolve_run_date(run_date)
    date_str = resolved.strftime("%Y-%m-%d")
    location = _join_location(base, predictions_path_for(resolved))
    logger.info("Fetching predictions from %s", location)

    started = time.perf_counter()
    try:
        if not _is_http(base):
            return await asyncio.to_thread(_read_local, location, date_str)
        if session is not None:
            return await _get_text(session, location, date_str, timeout)
        async with aiohttp.ClientSession() as owned:
            return await _get_text(owned, location, date_str, timeout)
    finally:
        get_metrics_recorder().timing("fetch_ms", (time.perf_counter() - started) * 1000)


async def _get_text(
    session: aiohttp.ClientSession,
    location: str,
    date_str: str,
    timeout: float,
) -> str:
    try:
        async with session.get(location, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            if response.status != 200:
                logger.error(
                    "Prediction file request %s returned status %s",
                    location,
                    response.status,
                )
                raise FetchError(date_str, location)
            return await response.text()
    except aiohttp.ClientError as exc:
        logger.error("Network error loading prediction file %s: %s", location, exc)
        raise FetchError(date_str, location, exc) from exc
    except asyncio.TimeoutError as exc:
        logger.error("Timeout loading prediction file %s", location)
        raise FetchError(date_str, location, exc) from exc
