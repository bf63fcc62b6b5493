"""
Pytest configuration for rabbitmq-http-client tests.

Shared connection constants are defined here so every test file can import them
instead of hardcoding URLs and credentials. Integration tests need a RabbitMQ
broker with the management plugin enabled and are skipped when it is not
reachable.
"""

import os
from collections.abc import Generator

import httpx
import pytest

# ---------------------------------------------------------------------------
# Shared connection constants
# ---------------------------------------------------------------------------
TEST_PORT = int(os.getenv("RABBITMQ_MANAGEMENT_PORT", "15672"))
RABBITMQ_URL = os.getenv("RABBITMQ_MANAGEMENT_URL", f"http://localhost:{TEST_PORT}/api/")
RABBITMQ_USER = os.getenv("RABBITMQ_MANAGEMENT_USER", "guest")
RABBITMQ_PASS = os.getenv("RABBITMQ_MANAGEMENT_PASS", "guest")
HEALTH_CHECK_TIMEOUT = 2  # seconds


def is_rabbitmq_healthy() -> bool:
    """Check if the management API answers /overview with the test credentials."""
    try:
        response = httpx.get(
            RABBITMQ_URL.rstrip("/") + "/overview",
            auth=(RABBITMQ_USER, RABBITMQ_PASS),
            timeout=HEALTH_CHECK_TIMEOUT,
        )
        return response.status_code == 200
    except httpx.HTTPError:
        return False


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "integration: requires a running RabbitMQ management API")


@pytest.fixture(scope="session")
def rabbitmq_available() -> Generator[bool, None, None]:
    """
    Session-scoped fixture that indicates if the management API is available.

    Use this fixture in tests that need to conditionally skip:

        def test_something(rabbitmq_available):
            if not rabbitmq_available:
                pytest.skip("RabbitMQ not available")
    """
    yield is_rabbitmq_healthy()
