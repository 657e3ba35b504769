"""Pytest configuration and fixtures for neo-authn tests."""

from datetime import datetime, timedelta, timezone

import pytest

from neo_authn.core.value_objects import TokenId, TokenSecret
from neo_authn.features.auth.entities.token import Token


class FakeClock:
    """Monotonic clock the test advances by hand."""
    
    def __init__(self, start: float = 1000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Controllable clock for TTL tests."""
    return FakeClock()


@pytest.fixture
def sample_token():
    """Valid token for user U123."""
    return Token.new("U123", "alice@example.com", "Alice")


@pytest.fixture
def expired_token():
    """Token for user U999 that expired an hour ago."""
    now = datetime.now(timezone.utc)
    return Token(
        id=TokenId("U999"),
        secret=TokenSecret.generate(),
        email="old@example.com",
        name="Old User",
        expires_at=now - timedelta(hours=1),
        created_at=now - timedelta(days=8),
    )
