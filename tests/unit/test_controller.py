"""Unit tests for the presentation controller."""

import asyncio

import numpy as np
import pytest

from propstradamus.config import Config
from propstradamus.constants import STAGE_NAMES
from propstradamus.exceptions import EmptyResultError, FetchError
from propstradamus.models.selection import SelectionResult, select_picks
from propstradamus.normalization import validate_rows
from propstradamus.presentation import PresentationController, ViewKind


class RecordingSleep:
    """Sleep that returns control to the loop immediately and logs the delay."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def config():
    return Config(tick_interval=0.5, progress_step=5, data_start_delay=2.0)


@pytest.fixture
def selection(example_rows):
    return select_picks(validate_rows(example_rows), rng=np.random.default_rng(0))


def _source(result):
    async def _load():
        return result
    return _load


@pytest.mark.asyncio
async def test_runs_full_sequence_then_shows_headline(config, selection):
    sleep = RecordingSleep()
    snapshots = []
    controller = PresentationController(
        config,
        data_source=_source(selection),
        on_update=lambda state: snapshots.append((state.progress, state.stage_index, state.analyzing)),
        sleep=sleep,
    )

    state = await controller.run()

    assert controller.view() is ViewKind.HEADLINE
    assert state.progress == 100
    assert state.result is selection
    assert sleep.calls.count(0.5) == 20
    assert sum(c for c in sleep.calls if c == 0.5) == pytest.approx(controller.min_duration)
    assert 2.0 in sleep.calls

    progress = [p for p, _, _ in snapshots]
    assert progress == sorted(progress)
    stages = [s for _, s, _ in snapshots]
    assert stages == sorted(stages)
    assert set(stages) == set(range(len(STAGE_NAMES)))


@pytest.mark.asyncio
async def test_result_hidden_until_animation_finishes(config, selection):
    views = []

    def _record(state):
        views.append((state.analyzing, state.loading_data, controller.view()))

    controller = PresentationController(
        config,
        data_source=_source(selection),
        on_update=_record,
        sleep=RecordingSleep(),
    )
    await controller.run()

    for analyzing, _, view in views:
        if analyzing:
            assert view is ViewKind.ANALYZING
    # Data arrived while the progress bar was still running.
    assert any(analyzing and not loading for analyzing, loading, _ in views)


@pytest.mark.asyncio
async def test_loading_view_when_data_is_slower_than_animation(config, selection):
    gate = asyncio.Event()

    async def slow():
        await gate.wait()
        return selection

    controller = PresentationController(config, data_source=slow, sleep=RecordingSleep())
    task = asyncio.create_task(controller.run())
    for _ in range(200):
        if not controller.state.analyzing:
            break
        await asyncio.sleep(0)

    assert controller.view() is ViewKind.LOADING
    gate.set()
    await task
    assert controller.view() is ViewKind.HEADLINE


@pytest.mark.asyncio
async def test_fetch_error_becomes_error_view(config):
    async def failing():
        raise FetchError("2025-03-07", "predictions/predictions_2025-03-07.csv")

    controller = PresentationController(config, data_source=failing, sleep=RecordingSleep())
    state = await controller.run()

    assert controller.view() is ViewKind.ERROR
    assert "2025-03-07" in state.error
    assert state.result is None


@pytest.mark.asyncio
async def test_empty_file_error_message(config):
    async def empty():
        raise EmptyResultError()

    controller = PresentationController(config, data_source=empty, sleep=RecordingSleep())
    state = await controller.run()
    assert controller.view() is ViewKind.ERROR
    assert state.error == "No prediction data found"


@pytest.mark.asyncio
async def test_no_valid_records_is_empty_view(config):
    empty = SelectionResult(headline=None, runners_up=[], ranked=[])
    controller = PresentationController(config, data_source=_source(empty), sleep=RecordingSleep())
    await controller.run()
    assert controller.view() is ViewKind.EMPTY


@pytest.mark.asyncio
async def test_cancel_stops_timer_and_fetch(config):
    fetch_cancelled = asyncio.Event()

    async def never():
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            fetch_cancelled.set()
            raise

    async def slow_sleep(seconds):
        await asyncio.sleep(0.01)

    controller = PresentationController(config, data_source=never, sleep=slow_sleep)
    task = asyncio.create_task(controller.run())
    await asyncio.sleep(0.05)
    controller.cancel()
    state = await task

    assert state.cancelled
    assert fetch_cancelled.is_set()
    assert state.progress < 100
    assert controller.view() is ViewKind.ANALYZING


@pytest.mark.asyncio
async def test_single_cycle_per_controller(config, selection):
    controller = PresentationController(config, data_source=_source(selection), sleep=RecordingSleep())
    await controller.run()
    with pytest.raises(RuntimeError):
        await controller.run()
