"""
Shared pytest fixtures for Pomodoro tests.

This module provides common fixtures including:
- FakeClock: controllable time source so tests never sleep
- A session registry wired to the fake clock
- FastAPI test client with the registry swapped in
"""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pomodoro.modules.session import SessionModule


# =============================================================================
# Clock Mocking Infrastructure
# =============================================================================


class FakeClock:
    """
    Manually advanced monotonic clock.

    Usage:
        def test_countdown(fake_clock, session_module):
            ...
            fake_clock.advance(10)
            snapshot = await session_module.get_session(1)
            assert snapshot.elapsed_secs == 10
    """

    def __init__(self, start: float = 1000.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds

    def rewind(self, seconds: float) -> None:
        """Move time backwards to simulate clock skew."""
        self._now -= seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def session_module(fake_clock):
    """Empty registry driven by the fake clock."""
    return SessionModule(clock=fake_clock)


# =============================================================================
# FastAPI Test Client
# =============================================================================


@pytest.fixture
def client(session_module):
    """
    TestClient running the real app, with the lifespan-created registry
    replaced by one on the fake clock.
    """
    from fastapi.testclient import TestClient

    from pomodoro import main

    with TestClient(main.app) as test_client:
        main.session_module = session_module
        yield test_client


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "concurrency: Tests exercising concurrent registry access"
    )
