"""Pytest configuration and shared fixtures for authn-transport tests."""

import httpx
import pytest


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear credential-looking environment variables before each test.

    This prevents test pollution when testing environment-based credentials.
    """
    import os

    test_prefixes = ("TEST_", "REGISTRY_", "API_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


class RecordingHandler:
    """MockTransport handler that answers from a status script and records requests."""

    def __init__(self, *statuses: int):
        self.statuses = list(statuses)
        self.authorizations: list[str | None] = []
        self.hosts: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.authorizations.append(request.headers.get("Authorization"))
        self.hosts.append(request.url.host)
        status = self.statuses[min(len(self.authorizations), len(self.statuses)) - 1]
        return httpx.Response(status, text=f"attempt {len(self.authorizations)}")

    @property
    def attempts(self) -> int:
        return len(self.authorizations)


@pytest.fixture
def recording_handler():
    """Factory for RecordingHandler instances."""
    return RecordingHandler
