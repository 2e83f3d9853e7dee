"""Action, Decision, DecisionBatch, ValidationConfig Pydantic models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

if TYPE_CHECKING:
    from decision_engine.config import Settings


class Action(str, Enum):
    OPEN_LONG = "open_long"
    OPEN_SHORT = "open_short"
    CLOSE_LONG = "close_long"
    CLOSE_SHORT = "close_short"
    HOLD = "hold"
    WAIT = "wait"


OPEN_ACTIONS = (Action.OPEN_LONG, Action.OPEN_SHORT)


class Decision(BaseModel):
    """One proposed action on one instrument, as emitted by the model.

    Missing keys and JSON null fall back to zero values and unknown keys are
    ignored, but types are strict: ``"leverage": "3"``, ``"leverage": 3.5`` or
    ``NaN`` fails decoding.
    ``action`` stays a raw string so an unknown action is reported by the
    validator at its batch position.
    """

    model_config = ConfigDict(strict=True, extra="ignore", allow_inf_nan=False)

    symbol: str = ""
    action: str = ""  # open_long, open_short, close_long, close_short, hold, wait
    leverage: int = 0
    position_size_usd: float = 0.0
    stop_loss: float = 0.0
    take_profit: float = 0.0
    confidence: int = 0  # 0-100, advisory
    risk_usd: float = 0.0  # advisory
    reasoning: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def is_open(self) -> bool:
        return self.action in OPEN_ACTIONS


class DecisionBatch(BaseModel):
    narrative: str = ""
    decisions: list[Decision] = []
    user_prompt: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ValidationConfig(BaseModel):
    """Per-invocation guardrail parameters. Never cached by the engine."""

    model_config = ConfigDict(frozen=True)

    account_equity: float = Field(gt=0)
    major_leverage_cap: int = Field(ge=1)
    altcoin_leverage_cap: int = Field(ge=1)
    major_symbols: tuple[str, ...] = ("BTCUSDT", "ETHUSDT")
    major_position_multiple: float = 10.0
    altcoin_position_multiple: float = 1.5
    position_tolerance_pct: float = 0.01
    min_risk_reward_ratio: float = 2.5
    assumed_entry_fraction: float = Field(default=0.2, gt=0, lt=1)

    @classmethod
    def from_settings(cls, settings: Settings, account_equity: float) -> ValidationConfig:
        return cls(
            account_equity=account_equity,
            major_leverage_cap=settings.MAJOR_LEVERAGE_CAP,
            altcoin_leverage_cap=settings.ALTCOIN_LEVERAGE_CAP,
            major_symbols=tuple(settings.MAJOR_SYMBOLS),
            major_position_multiple=settings.MAJOR_POSITION_EQUITY_MULTIPLE,
            altcoin_position_multiple=settings.ALTCOIN_POSITION_EQUITY_MULTIPLE,
            position_tolerance_pct=settings.POSITION_SIZE_TOLERANCE_PCT,
            min_risk_reward_ratio=settings.MIN_RISK_REWARD_RATIO,
            assumed_entry_fraction=settings.ASSUMED_ENTRY_FRACTION,
        )
