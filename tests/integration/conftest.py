"""Pytest fixtures for integration tests against the live Starfighter API"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from starfighter import API_LOCATION, ClientConfig, StarfighterClient

# Load STARFIGHTER_* variables from the repository .env, if present
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


@pytest.fixture(scope="module")
def live_config():
    """Real API configuration, or skip when no token is available."""
    token = os.getenv("STARFIGHTER_TOKEN")
    if not token:
        pytest.skip("STARFIGHTER_TOKEN not set")

    return ClientConfig(
        token=token,
        base_url=os.getenv("STARFIGHTER_BASE_URL", API_LOCATION),
    )


@pytest.fixture(scope="module")
def live_client(live_config):
    with StarfighterClient(live_config) as client:
        yield client


@pytest.fixture(scope="module")
def test_account():
    return os.getenv("STARFIGHTER_ACCOUNT", "EXB123456")
