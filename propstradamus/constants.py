"""Shared constants for the predictions file and the loading sequence."""

from typing import List, Tuple

PREDICTIONS_DIR = "predictions"
PREDICTIONS_FILE_TEMPLATE = "predictions_{date}.csv"

# CSV columns consumed by the validator; anything else in the file is ignored.
COL_PLAYER_NAME = "PLAYER_NAME"
COL_PROP_TYPE = "Prop_Type"
COL_LINE = "Line"
COL_XGBOOST = "xgboost"
COL_XGBOOST_RF = "xgboost_rf"
COL_CATBOOST = "catboost"
COL_ADV_NN = "Adv_NN"
COL_XGB_REG = "xgb_reg"
COL_XGB_RF_REG = "xgb_rf_reg"

PREDICTION_COLUMNS: List[str] = [
    COL_PLAYER_NAME,
    COL_PROP_TYPE,
    COL_LINE,
    COL_XGBOOST,
    COL_XGBOOST_RF,
    COL_CATBOOST,
    COL_ADV_NN,
    COL_XGB_REG,
    COL_XGB_RF_REG,
]

DEFAULT_ALLOWED_PROP_TYPES: Tuple[str, ...] = (
    "Fantasy score",
    "Points assists rebounds",
    "Rebounds assists",
    "Points rebounds",
    "Rebounds",
)

DEFAULT_MIN_XGBOOST = 0.65
DEFAULT_MIN_XGBOOST_RF = 0.55
DEFAULT_REQUIRED_CATBOOST = 1.0
DEFAULT_MIN_ADV_NN = 0.7

DEFAULT_SURPLUS_SIZE = 3

# Loading sequence
STAGE_NAMES: Tuple[str, ...] = (
    "LOADING PLAYER DATA",
    "FEATURE ENGINEERING",
    "ANALYZING MATCHUPS",
    "CALCULATING PROBABILITIES",
    "FINALIZING PREDICTION",
)
PROGRESS_COMPLETE = 100
PERCENT_PER_STAGE = PROGRESS_COMPLETE // len(STAGE_NAMES)
DEFAULT_TICK_INTERVAL = 0.5
DEFAULT_PROGRESS_STEP = 5
DEFAULT_DATA_START_DELAY = 2.0
DEFAULT_HTTP_TIMEOUT = 15.0

RUN_TIMEZONE = "America/New_York"

LOADING_MESSAGE = "Loading prediction data..."
EMPTY_MESSAGE = "No predictions available"
