"""Decision engine failures, one class per failing stage or rule.

Every error carries typed fields so callers branch on kind and values instead
of parsing messages. ``narrative`` and ``decisions`` are filled in by
``parse_full_decision_response`` so the model's reasoning can still be logged
when nothing is actionable.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decision_engine.models.decision import Decision


class DecisionEngineError(Exception):
    stage = "engine"

    def __init__(
        self,
        message: str,
        narrative: str = "",
        decisions: Sequence[Decision] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.narrative = narrative
        self.decisions: list[Decision] = list(decisions)


# ---------------------------------------------------------------------------
# Extraction / decode
# ---------------------------------------------------------------------------


class ExtractionError(DecisionEngineError):
    """No JSON array could be located in the response."""

    stage = "extraction"

    MISSING_ARRAY_START = "missing_array_start"
    UNTERMINATED_ARRAY = "unterminated_array"

    def __init__(self, reason: str) -> None:
        if reason == self.UNTERMINATED_ARRAY:
            message = "unterminated array: no matching ']' for the first '['"
        else:
            message = "no JSON array start '[' found in response"
        super().__init__(message)
        self.reason = reason


class DecodeError(DecisionEngineError):
    """The located array is not a valid list of decisions."""

    stage = "decode"

    def __init__(self, detail: str, content: str) -> None:
        super().__init__(f"JSON decode failed: {detail}\nJSON content: {content}")
        self.detail = detail
        self.content = content


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class DecisionValidationError(DecisionEngineError):
    """A decoded decision broke a rule. ``index`` is 1-based."""

    stage = "validation"

    def __init__(self, index: int, symbol: str, action: str, reason: str) -> None:
        super().__init__(f"decision #{index} ({symbol or '?'} {action or '?'}) invalid: {reason}")
        self.index = index
        self.symbol = symbol
        self.action = action
        self.reason = reason


class InvalidActionError(DecisionValidationError):
    def __init__(self, index: int, symbol: str, action: str) -> None:
        super().__init__(index, symbol, action, f"unknown action '{action}'")


class MissingFieldError(DecisionValidationError):
    def __init__(self, index: int, symbol: str, action: str, field: str) -> None:
        super().__init__(index, symbol, action, f"'{field}' is required and cannot be empty")
        self.field = field


class LeverageOutOfRangeError(DecisionValidationError):
    def __init__(
        self, index: int, symbol: str, action: str, leverage: int, max_leverage: int
    ) -> None:
        super().__init__(
            index, symbol, action, f"leverage must be within 1-{max_leverage}, got {leverage}"
        )
        self.leverage = leverage
        self.max_leverage = max_leverage


class InvalidPositionSizeError(DecisionValidationError):
    def __init__(self, index: int, symbol: str, action: str, position_size_usd: float) -> None:
        super().__init__(
            index, symbol, action, f"position_size_usd must be > 0, got {position_size_usd:.2f}"
        )
        self.position_size_usd = position_size_usd


class PositionSizeExceededError(DecisionValidationError):
    def __init__(
        self,
        index: int,
        symbol: str,
        action: str,
        position_size_usd: float,
        max_position_value: float,
        is_major: bool,
    ) -> None:
        kind = "major" if is_major else "altcoin"
        super().__init__(
            index,
            symbol,
            action,
            f"{kind} position value {position_size_usd:.0f} exceeds max {max_position_value:.0f}",
        )
        self.position_size_usd = position_size_usd
        self.max_position_value = max_position_value
        self.is_major = is_major


class InvalidPriceError(DecisionValidationError):
    def __init__(
        self, index: int, symbol: str, action: str, stop_loss: float, take_profit: float
    ) -> None:
        super().__init__(
            index,
            symbol,
            action,
            f"stop_loss and take_profit must be > 0, got {stop_loss} / {take_profit}",
        )
        self.stop_loss = stop_loss
        self.take_profit = take_profit


class InvalidPriceOrderingError(DecisionValidationError):
    def __init__(
        self, index: int, symbol: str, action: str, stop_loss: float, take_profit: float
    ) -> None:
        relation = "<" if action == "open_long" else ">"
        super().__init__(
            index,
            symbol,
            action,
            f"stop_loss ({stop_loss}) must be {relation} take_profit ({take_profit})",
        )
        self.stop_loss = stop_loss
        self.take_profit = take_profit


class RiskRewardTooLowError(DecisionValidationError):
    def __init__(
        self,
        index: int,
        symbol: str,
        action: str,
        ratio: float,
        risk_pct: float,
        reward_pct: float,
        stop_loss: float,
        take_profit: float,
        min_ratio: float,
    ) -> None:
        super().__init__(
            index,
            symbol,
            action,
            f"R:R {ratio:.2f}:1 < min {min_ratio}:1 "
            f"[risk {risk_pct:.2f}% reward {reward_pct:.2f}%] "
            f"[SL {stop_loss:.2f} TP {take_profit:.2f}]",
        )
        self.ratio = ratio
        self.risk_pct = risk_pct
        self.reward_pct = reward_pct
        self.stop_loss = stop_loss
        self.take_profit = take_profit
        self.min_ratio = min_ratio
