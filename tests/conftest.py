"""Pytest fixtures for Starfighter client tests"""

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from starfighter import ClientConfig, StarfighterClient

TEST_TOKEN = "test_token_123"
TEST_BASE_URL = "https://api.test.local/ob/api"

_FIXTURE_CACHE = {}


def _cached_fixture_load(fixtures_dir: Path, filename: str) -> bytes:
    """Load and cache fixture files to avoid repeated file I/O."""
    fixture_path = fixtures_dir / "stockfighter_responses" / filename
    cache_key = str(fixture_path)
    if cache_key not in _FIXTURE_CACHE:
        _FIXTURE_CACHE[cache_key] = fixture_path.read_bytes()
    return _FIXTURE_CACHE[cache_key]


@pytest.fixture(scope="session")
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def load_fixture(fixtures_dir):
    """Helper returning the raw bytes of a JSON response fixture.

    Session scope: Fixture loading is immutable and cached.
    """

    def _load(filename):
        return _cached_fixture_load(fixtures_dir, filename)

    return _load


@pytest.fixture(scope="session")
def load_fixture_json(load_fixture):
    """Helper returning a JSON response fixture as a dict."""

    def _load(filename):
        return json.loads(load_fixture(filename))

    return _load


@pytest.fixture
def test_token() -> str:
    return TEST_TOKEN


@pytest.fixture
def test_base_url() -> str:
    return TEST_BASE_URL


@pytest.fixture
def test_config(test_token, test_base_url) -> ClientConfig:
    return ClientConfig(token=test_token, base_url=test_base_url)


@pytest.fixture
def captured_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order"""
    return []


@pytest.fixture
def make_client(test_config, captured_requests):
    """Build a StarfighterClient backed by httpx.MockTransport.

    Either pass a canned response (status_code plus json_body or content)
    or a handler taking the httpx.Request. Every request is recorded in
    ``captured_requests``.
    """
    http_clients = []

    def _make(
        status_code: int = 200,
        json_body: object = None,
        content: bytes | None = None,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> StarfighterClient:
        def _canned(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            body = {"ok": True} if json_body is None else json_body
            return httpx.Response(status_code, json=body)

        def _record(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            return (handler or _canned)(request)

        http_client = httpx.Client(transport=httpx.MockTransport(_record))
        http_clients.append(http_client)
        return StarfighterClient(test_config, http_client=http_client)

    yield _make

    for http_client in http_clients:
        http_client.close()
