"""Fixtures for decision-engine tests."""

from __future__ import annotations

import json

import pytest
import structlog

from decision_engine.config import Settings
from decision_engine.models.decision import ValidationConfig


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ANTHROPIC_API_KEY="test-key",
        REASONING_MODEL="claude-opus-4-1",
        REASONING_MAX_TOKENS=4096,
        MAX_REASONING_TIMEOUT_SECONDS=30,
        MAJOR_SYMBOLS=["BTCUSDT", "ETHUSDT"],
        MAJOR_LEVERAGE_CAP=10,
        ALTCOIN_LEVERAGE_CAP=5,
    )


@pytest.fixture
def validation_config() -> ValidationConfig:
    """Equity 10000: major ceiling 100000, altcoin ceiling 15000."""
    return ValidationConfig(
        account_equity=10000.0,
        major_leverage_cap=10,
        altcoin_leverage_cap=5,
    )


@pytest.fixture
def open_long_dict() -> dict:
    return {
        "symbol": "BTCUSDT",
        "action": "open_long",
        "leverage": 5,
        "position_size_usd": 50000.0,
        "stop_loss": 60000.0,
        "take_profit": 66000.0,
        "confidence": 80,
        "risk_usd": 400.0,
        "reasoning": "Breakout above range high with rising OI",
    }


@pytest.fixture
def hold_dict() -> dict:
    return {"symbol": "ETHUSDT", "action": "hold", "reasoning": "Position still within plan"}


@pytest.fixture
def sample_response(open_long_dict, hold_dict) -> str:
    return (
        "BTC is pressing the 4h range high while open interest climbs.\n"
        "ETH long remains valid, keep it.\n\n"
        + json.dumps([open_long_dict, hold_dict], indent=2)
    )
