"""Operational helpers."""

from propstradamus.ops.logging import configure_logging
from propstradamus.ops.metrics import MetricsRecorder, get_metrics_recorder, reset_metrics_recorder

__all__ = ["configure_logging", "MetricsRecorder", "get_metrics_recorder", "reset_metrics_recorder"]
