"""CSV parsing of the predictions file.

pandas infers column types, so numeric cells arrive as numbers and empty cells
as None. Tokens such as NA or null stay as text. Blank lines are skipped.
"""

from typing import Any, Dict, List
import io
import logging
import time

import pandas as pd

from propstradamus.exceptions import ParseError
from propstradamus.ops import get_metrics_recorder

logger = logging.getLogger(__name__)


def parse_predictions_csv(text: str) -> List[Dict[str, Any]]:
    """Parse CSV text with a header row into one dict per data row.

    Returns an empty list when the document has no header or no rows.
    """
    metrics = get_metrics_recorder()
    if text is None or not text.strip():
        return []

    started = time.perf_counter()
    try:
        df = pd.read_csv(
            io.StringIO(text),
            skip_blank_lines=True,
            keep_default_na=False,
            na_values=[""],
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        logger.error("Error parsing prediction data: %s", exc)
        raise ParseError(str(exc), exc) from exc
    finally:
        metrics.timing("parse_ms", (time.perf_counter() - started) * 1000)

    df.columns = [str(col).strip() for col in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    rows = df.to_dict(orient="records")
    metrics.increment("rows_parsed", len(rows))
    logger.debug("Parsed %d prediction rows with columns %s", len(rows), list(df.columns))
    return rows
