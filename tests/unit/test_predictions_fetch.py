"""Unit tests for locating and retrieving the daily predictions file."""

from datetime import date, datetime

import pytest
import requests

from propstradamus.exceptions import ConfigurationError, FetchError
from propstradamus.ingestion import (
    fetch_predictions_text,
    fetch_predictions_text_async,
    predictions_path_for,
    resolve_run_date,
)


@pytest.mark.parametrize("run_date, expected", [
    (date(2025, 3, 7), "predictions/predictions_2025-03-07.csv"),
    (datetime(2024, 11, 30, 23, 59), "predictions/predictions_2024-11-30.csv"),
    ("2025-01-02", "predictions/predictions_2025-01-02.csv"),
])
def test_predictions_path_is_zero_padded(run_date, expected):
    assert predictions_path_for(run_date) == expected


def test_resolve_run_date_defaults_to_today():
    assert isinstance(resolve_run_date(None), date)
    assert resolve_run_date("") == resolve_run_date(None)


def test_fetch_local_file(predictions_dir, sample_csv):
    text = fetch_predictions_text(str(predictions_dir), "2025-03-07")
    assert text == sample_csv


def test_fetch_local_missing_file_names_the_date(tmp_path):
    with pytest.raises(FetchError) as excinfo:
        fetch_predictions_text(str(tmp_path), "2025-03-08")
    assert "2025-03-08" in str(excinfo.value)
    assert excinfo.value.date_str == "2025-03-08"
    assert excinfo.value.path.endswith("predictions_2025-03-08.csv")


class StubResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.response


def test_fetch_http_joins_base_url(sample_csv):
    session = StubSession(StubResponse(200, sample_csv))
    text = fetch_predictions_text("https://picks.example.com/app/", "2025-03-07", session=session)
    assert text == sample_csv
    assert session.urls == ["https://picks.example.com/app/predictions/predictions_2025-03-07.csv"]


def test_fetch_http_404_is_fetch_error():
    session = StubSession(StubResponse(404))
    with pytest.raises(FetchError) as excinfo:
        fetch_predictions_text("https://picks.example.com", "2025-03-07", session=session)
    assert "2025-03-07" in str(excinfo.value)
    assert isinstance(excinfo.value.original_error, requests.HTTPError)


def test_fetch_http_network_error_is_fetch_error():
    session = StubSession(error=requests.ConnectionError("connection refused"))
    with pytest.raises(FetchError):
        fetch_predictions_text("http://localhost:9", "2025-03-07", session=session)


class StubAsyncResponse:
    def __init__(self, status, body=""):
        self.status = status
        self.reason = "Not Found" if status == 404 else "OK"
        self._body = body

    async def text(self):
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class StubAsyncSession:
    def __init__(self, response):
        self.response = response
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        return self.response


@pytest.mark.asyncio
async def test_async_fetch_local_file(predictions_dir, sample_csv):
    text = await fetch_predictions_text_async(str(predictions_dir), "2025-03-07")
    assert text == sample_csv


@pytest.mark.asyncio
async def test_async_fetch_local_missing_file(tmp_path):
    with pytest.raises(FetchError) as excinfo:
        await fetch_predictions_text_async(str(tmp_path), date(2025, 12, 1))
    assert "2025-12-01" in str(excinfo.value)


@pytest.mark.asyncio
async def test_async_fetch_http(sample_csv):
    session = StubAsyncSession(StubAsyncResponse(200, sample_csv))
    text = await fetch_predictions_text_async("https://picks.example.com", "2025-03-07", session=session)
    assert text == sample_csv
    assert session.urls == ["https://picks.example.com/predictions/predictions_2025-03-07.csv"]


@pytest.mark.asyncio
async def test_async_fetch_http_404():
    session = StubAsyncSession(StubAsyncResponse(404))
    with pytest.raises(FetchError) as excinfo:
        await fetch_predictions_text_async("https://picks.example.com", "2025-03-07", session=session)
    assert "2025-03-07" in str(excinfo.value)


@pytest.mark.parametrize("run_date", ["03/07/2025", "2025-13-01", "today"])
def test_malformed_run_date_is_configuration_error(run_date):
    with pytest.raises(ConfigurationError) as excinfo:
        predictions_path_for(run_date)
    assert excinfo.value.setting == "RUN_DATE"
