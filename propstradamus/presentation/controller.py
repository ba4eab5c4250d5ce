"""Presentation controller for one prediction cycle.

Two tasks run side by side: a timer that walks the progress bar through the
loading stages, and a data task that fetches the file and selects the picks.
The result is only revealed once both have finished, so the loading sequence
always runs for its full duration even when the data is ready early.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional
import asyncio
import logging

import numpy as np

from propstradamus.config import Config
from propstradamus.constants import (
    PERCENT_PER_STAGE,
    PROGRESS_COMPLETE,
    STAGE_NAMES,
)
from propstradamus.exceptions import PropstradamusError
from propstradamus.models.selection import SelectionResult
from propstradamus.pipeline import fetch_and_select_async

logger = logging.getLogger(__name__)

DataSource = Callable[[], Awaitable[SelectionResult]]
UpdateCallback = Callable[["PresentationState"], None]


class ViewKind(Enum):
    ANALYZING = "analyzing"
    LOADING = "loading"
    ERROR = "error"
    HEADLINE = "headline"
    EMPTY = "empty"


@dataclass
class PresentationState:
    stage_index: int = 0
    progress: int = 0
    analyzing: bool = True
    loading_data: bool = True
    error: Optional[str] = None
    result: Optional[SelectionResult] = None
    cancelled: bool = False

    @property
    def stage_name(self) -> str:
        if self.stage_index < len(STAGE_NAMES):
            return STAGE_NAMES[self.stage_index]
        return "PROCESSING"


class PresentationController:
    """Runs the loading sequence and the data task, then exposes one view.

    Each controller runs a single cycle; build a new one for the next load.
    """

    def __init__(
        self,
        config: Config,
        data_source: Optional[DataSource] = None,
        rng: Optional[np.random.Generator] = None,
        on_update: Optional[UpdateCallback] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._data_source = data_source or (lambda: fetch_and_select_async(config, rng=rng))
        self._on_update = on_update
        self._sleep = sleep
        self.state = PresentationState()
        self._animation_task: Optional[asyncio.Task] = None
        self._data_task: Optional[asyncio.Task] = None
        self._started = False

    @property
    def min_duration(self) -> float:
        return self._config.min_animation_seconds

    async def run(self) -> PresentationState:
        if self._started:
            raise RuntimeError("PresentationController runs a single cycle")
        self._started = True

        self._animation_task = asyncio.create_task(self._animate())
        self._data_task = asyncio.create_task(self._load())
        tasks = (self._animation_task, self._data_task)
        try:
            await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            self._cancel_tasks()
            await asyncio.gather(*tasks, return_exceptions=True)
            if not self.state.cancelled:
                raise
            logger.info("Prediction cycle cancelled")
        finally:
            self._cancel_tasks()
        return self.state

    def cancel(self) -> None:
        """Stop the timer and any in-flight fetch. No retry follows."""
        self.state.cancelled = True
        self._cancel_tasks()

    def view(self) -> ViewKind:
        state = self.state
        if state.analyzing:
            return ViewKind.ANALYZING
        if state.loading_data:
            return ViewKind.LOADING
        if state.error is not None:
            return ViewKind.ERROR
        if state.result is not None and not state.result.is_empty:
            return ViewKind.HEADLINE
        return ViewKind.EMPTY

    def _cancel_tasks(self) -> None:
        for task in (self._animation_task, self._data_task):
            if task is not None and not task.done():
                task.cancel()

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self.state)

    async def _animate(self) -> None:
        step = self._config.progress_step
        last_stage = len(STAGE_NAMES) - 1
        self._notify()
        while self.state.progress < PROGRESS_COMPLETE:
            await self._sleep(self._config.tick_interval)
            # Stage follows the progress reached before this tick.
            self.state.stage_index = min(self.state.progress // PERCENT_PER_STAGE, last_stage)
            self.state.progress = min(self.state.progress + step, PROGRESS_COMPLETE)
            self._notify()
        self.state.analyzing = False
        self._notify()

    async def _load(self) -> None:
        await self._sleep(self._config.data_start_delay)
        result: Optional[SelectionResult] = None
        error: Optional[str] = None
        try:
            result = await self._data_source()
        except PropstradamusError as exc:
            logger.error("Prediction cycle failed: %s", exc)
            error = str(exc)
        self._publish(result, error)

    def _publish(self, result: Optional[SelectionResult], error: Optional[str]) -> None:
        if not self.state.loading_data:
            raise RuntimeError("cycle result already published")
        self.state.result = result
        self.state.error = error
        self.state.loading_data = False
        self._notify()
