"""Configuration for the prediction cycle."""

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional, Dict, List
import json
import math
import os

from propstradamus.constants import (
    DEFAULT_ALLOWED_PROP_TYPES,
    DEFAULT_DATA_START_DELAY,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_MIN_ADV_NN,
    DEFAULT_MIN_XGBOOST,
    DEFAULT_MIN_XGBOOST_RF,
    DEFAULT_PROGRESS_STEP,
    DEFAULT_REQUIRED_CATBOOST,
    DEFAULT_SURPLUS_SIZE,
    DEFAULT_TICK_INTERVAL,
    PROGRESS_COMPLETE,
)
from propstradamus.exceptions import ConfigurationError
from propstradamus.models.selection import ConfidenceThresholds


_DEFAULT_BASE_URL = "."


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_int(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _coerce_list(value: Optional[str], default: List[str]) -> List[str]:
    if value is None or value == "":
        return list(default)
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return list(default)


def _parse_env_file(path: Path) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = _strip_quotes(value.strip())
    return data


def _load_config_data(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise ConfigurationError(str(path), "config file not found")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(str(path), f"invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(str(path), "expected a JSON object")
        return {
            str(k): ",".join(str(item) for item in v) if isinstance(v, list) else str(v)
            for k, v in payload.items()
            if v is not None
        }
    return _parse_env_file(path)


@dataclass
class Config:
    # Where the daily predictions file lives
    base_url: str = _DEFAULT_BASE_URL
    run_date: str = ""
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    # Selection
    random_seed: Optional[int] = None
    surplus_size: int = DEFAULT_SURPLUS_SIZE
    allowed_prop_types: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_PROP_TYPES))
    min_xgboost: float = DEFAULT_MIN_XGBOOST
    min_xgboost_rf: float = DEFAULT_MIN_XGBOOST_RF
    required_catboost: float = DEFAULT_REQUIRED_CATBOOST
    min_adv_nn: float = DEFAULT_MIN_ADV_NN

    # Loading sequence timing (seconds)
    tick_interval: float = DEFAULT_TICK_INTERVAL
    progress_step: int = DEFAULT_PROGRESS_STEP
    data_start_delay: float = DEFAULT_DATA_START_DELAY

    def __post_init__(self) -> None:
        if self.surplus_size < 0:
            raise ConfigurationError("SURPLUS_SIZE", "must be zero or positive")
        if self.progress_step <= 0:
            raise ConfigurationError("PROGRESS_STEP", "must be positive")
        if self.tick_interval < 0:
            raise ConfigurationError("TICK_INTERVAL", "must not be negative")
        if self.data_start_delay < 0:
            raise ConfigurationError("DATA_START_DELAY", "must not be negative")

    @classmethod
    def from_env(cls) -> "Config":
        return cls._from_mapping(os.environ, cls())

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        env_config = cls.from_env()
        if not config_path:
            return env_config
        file_data = _load_config_data(Path(config_path))
        return cls._from_mapping(file_data, env_config)

    @classmethod
    def _from_mapping(cls, data, fallback: "Config") -> "Config":
        seed = data.get("RANDOM_SEED")
        return cls(
            base_url=data.get("PROPSTRADAMUS_BASE_URL") or fallback.base_url,
            run_date=data.get("RUN_DATE", fallback.run_date),
            http_timeout=_coerce_float(data.get("HTTP_TIMEOUT"), fallback.http_timeout),
            random_seed=(
                _coerce_optional_int(seed)
                if seed not in (None, "")
                else fallback.random_seed
            ),
            surplus_size=_coerce_int(data.get("SURPLUS_SIZE"), fallback.surplus_size),
            allowed_prop_types=_coerce_list(
                data.get("ALLOWED_PROP_TYPES"),
                fallback.allowed_prop_types,
            ),
            min_xgboost=_coerce_float(data.get("MIN_XGBOOST"), fallback.min_xgboost),
            min_xgboost_rf=_coerce_float(data.get("MIN_XGBOOST_RF"), fallback.min_xgboost_rf),
            required_catboost=_coerce_float(
                data.get("REQUIRED_CATBOOST"),
                fallback.required_catboost,
            ),
            min_adv_nn=_coerce_float(data.get("MIN_ADV_NN"), fallback.min_adv_nn),
            tick_interval=_coerce_float(data.get("TICK_INTERVAL"), fallback.tick_interval),
            progress_step=_coerce_int(data.get("PROGRESS_STEP"), fallback.progress_step),
            data_start_delay=_coerce_float(
                data.get("DATA_START_DELAY"),
                fallback.data_start_delay,
            ),
        )

    def to_dict(self) -> Dict[str, str]:
        return {k: str(v) for k, v in asdict(self).items()}

    def thresholds(self) -> ConfidenceThresholds:
        return ConfidenceThresholds(
            allowed_prop_types=frozenset(self.allowed_prop_types),
            min_xgboost=self.min_xgboost,
            min_xgboost_rf=self.min_xgboost_rf,
            required_catboost=self.required_catboost,
            min_adv_nn=self.min_adv_nn,
        )

    @property
    def min_animation_seconds(self) -> float:
        """Shortest time the loading sequence runs before a result may show."""
        ticks = math.ceil(PROGRESS_COMPLETE / self.progress_step)
        return ticks * self.tick_interval
