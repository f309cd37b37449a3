"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import os
import threading
import time
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from crpt_api.core.ports.transport_port import TransportResponse
from crpt_api.samples import sample_document


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """
    Drops CRPT_API_* variables and runs every test from an empty directory,
    so neither the developer's environment nor a stray .env leaks into configuration.
    """
    for key in list(os.environ):
        if key.upper().startswith("CRPT_API_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def document():
    return sample_document()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


class RecordingTransport:
    """Transport double that records every call with its arrival time."""

    def __init__(self, status_code: int = 200, body: bytes = b"{}", error: Exception | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.error = error
        self.calls: list[dict] = []
        self._lock = threading.Lock()

    def send(self, method, url, headers, body):
        with self._lock:
            self.calls.append(
                {"method": method, "url": url, "headers": dict(headers), "body": body, "at": time.monotonic()}
            )
        if self.error is not None:
            raise self.error
        return TransportResponse(status_code=self.status_code, body=self.body)

    @property
    def arrival_times(self) -> list[float]:
        with self._lock:
            return sorted(c["at"] for c in self.calls)


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


def max_in_window(times: list[float], window: float) -> int:
    """Largest number of timestamps falling inside any half-open span of length `window`."""
    times = sorted(times)
    best = 0
    for i, start in enumerate(times):
        count = sum(1 for t in times[i:] if t < start + window)
        best = max(best, count)
    return best


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    """
    responses = {}
    calls_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "POST",
        status_code: int = 200,
        content: bytes = b"",
    ):
        """Register a mock response for a given URL and method."""
        responses[(method.upper(), url)] = (status_code, content)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        request.read()
        calls_log.append(request)
        key = (request.method, str(request.url))
        if key in responses:
            status, body = responses[key]
            return httpx.Response(status, content=body)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    # Patch httpx.Client to always use our mock transport
    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    # expose call log on the returned function
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response


@pytest.fixture
def transport_factory():
    """Factory for RecordingTransport doubles with custom status/body/error."""
    return RecordingTransport


@pytest.fixture
def window_counter():
    return max_in_window
