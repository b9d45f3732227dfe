"""Pytest configuration and fixtures."""

import httpx
import pytest

from ossclient.core.config import get_settings
from ossclient.schemas.domain import Credentials

FIXED_NOW = 1700000000
ENDPOINT = "oss-cn-hangzhou.aliyuncs.com"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from OSS_* variables in the calling environment."""
    for name in (
        "OSS_CONFIG_FILE",
        "OSS_ENDPOINT",
        "OSS_ACCESS_KEY_ID",
        "OSS_ACCESS_KEY_SECRET",
        "OSS_DEFAULT_EXPIRE_SECONDS",
        "OSS_USE_HTTPS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def credentials():
    return Credentials(endpoint=ENDPOINT, access_key_id="test-ak", access_key_secret="testsecret")


@pytest.fixture
def fixed_clock():
    return lambda: float(FIXED_NOW)


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status_code=200, content=b"", headers=None, exc=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc(f"simulated {self.exc.__name__}", request=request)
        return httpx.Response(self.status_code, content=self.content, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_handler():
    return RecordingHandler
