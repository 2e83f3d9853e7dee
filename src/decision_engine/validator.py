"""Hardcoded decision guardrails: the model CANNOT override these rules."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from decision_engine.errors import (
    InvalidActionError,
    InvalidPositionSizeError,
    InvalidPriceError,
    InvalidPriceOrderingError,
    LeverageOutOfRangeError,
    MissingFieldError,
    PositionSizeExceededError,
    RiskRewardTooLowError,
)
from decision_engine.models.decision import Action, Decision, ValidationConfig

logger = structlog.get_logger()


class DecisionValidator:
    """
    Per-decision rules, checked in order, first violation aborts the batch:
    | Rule                | Applies to   | Threshold                                |
    |---------------------|--------------|------------------------------------------|
    | Known action        | all          | open/close long/short, hold, wait        |
    | Symbol + reasoning  | all          | non-empty                                |
    | Leverage            | open_*       | 1 <= leverage <= class cap               |
    | Position size       | open_*       | > 0                                      |
    | Position ceiling    | open_*       | major 10x / altcoin 1.5x equity, +1%     |
    | SL / TP present     | open_*       | both > 0                                 |
    | SL / TP ordering    | open_*       | long SL < TP, short SL > TP              |
    | Min R:R ratio       | open_*       | 2.5:1 at assumed 20% entry               |
    """

    def __init__(self, config: ValidationConfig) -> None:
        self.config = config

    def validate(self, decisions: Sequence[Decision]) -> None:
        """Validate decisions in array order. Raises on the first invalid one."""
        for index, decision in enumerate(decisions, start=1):
            self.validate_decision(decision, index)

    def validate_decision(self, decision: Decision, index: int) -> None:
        try:
            action = Action(decision.action)
        except ValueError:
            raise InvalidActionError(index, decision.symbol, decision.action) from None

        for field in ("symbol", "reasoning"):
            if not getattr(decision, field).strip():
                raise MissingFieldError(index, decision.symbol, decision.action, field)

        # close/hold/wait carry no trade parameters
        if not decision.is_open:
            return

        max_leverage, max_position_value = self._limits_for(decision.symbol)
        self._check_leverage(decision, index, max_leverage)
        self._check_position_size(decision, index, max_position_value)
        self._check_prices(decision, index, action)
        self._check_rr_ratio(decision, index, action)

    def is_major(self, symbol: str) -> bool:
        return symbol in self.config.major_symbols

    def _limits_for(self, symbol: str) -> tuple[int, float]:
        equity = self.config.account_equity
        if self.is_major(symbol):
            return (
                self.config.major_leverage_cap,
                equity * self.config.major_position_multiple,
            )
        return (
            self.config.altcoin_leverage_cap,
            equity * self.config.altcoin_position_multiple,
        )

    def _check_leverage(self, d: Decision, index: int, max_leverage: int) -> None:
        if not 1 <= d.leverage <= max_leverage:
            raise LeverageOutOfRangeError(index, d.symbol, d.action, d.leverage, max_leverage)

    def _check_position_size(self, d: Decision, index: int, max_position_value: float) -> None:
        # positive checks so non-finite values fail closed
        if not d.position_size_usd > 0:
            raise InvalidPositionSizeError(index, d.symbol, d.action, d.position_size_usd)
        # 1% over the class ceiling is accepted
        tolerance = max_position_value * self.config.position_tolerance_pct
        if not d.position_size_usd <= max_position_value + tolerance:
            raise PositionSizeExceededError(
                index,
                d.symbol,
                d.action,
                d.position_size_usd,
                max_position_value,
                self.is_major(d.symbol),
            )

    def _check_prices(self, d: Decision, index: int, action: Action) -> None:
        if not (d.stop_loss > 0 and d.take_profit > 0):
            raise InvalidPriceError(index, d.symbol, d.action, d.stop_loss, d.take_profit)

        if action == Action.OPEN_LONG:
            ordered = d.stop_loss < d.take_profit
        else:
            ordered = d.stop_loss > d.take_profit
        if not ordered:
            raise InvalidPriceOrderingError(index, d.symbol, d.action, d.stop_loss, d.take_profit)

    def _check_rr_ratio(self, d: Decision, index: int, action: Action) -> None:
        risk_pct, reward_pct, rr = self.risk_reward(d.stop_loss, d.take_profit, action)
        if rr < self.config.min_risk_reward_ratio:
            logger.debug("rr_ratio_rejected", symbol=d.symbol, rr=round(rr, 2))
            raise RiskRewardTooLowError(
                index,
                d.symbol,
                d.action,
                ratio=rr,
                risk_pct=risk_pct,
                reward_pct=reward_pct,
                stop_loss=d.stop_loss,
                take_profit=d.take_profit,
                min_ratio=self.config.min_risk_reward_ratio,
            )

    def assumed_entry(self, stop_loss: float, take_profit: float, action: Action) -> float:
        """Entry modeled part-way from SL toward TP, standing in for the market price."""
        fraction = self.config.assumed_entry_fraction
        if action == Action.OPEN_LONG:
            return stop_loss + (take_profit - stop_loss) * fraction
        return stop_loss - (stop_loss - take_profit) * fraction

    def risk_reward(
        self, stop_loss: float, take_profit: float, action: Action
    ) -> tuple[float, float, float]:
        """Return (risk %, reward %, reward/risk) relative to the assumed entry."""
        entry = self.assumed_entry(stop_loss, take_profit, action)
        if action == Action.OPEN_LONG:
            risk_pct = (entry - stop_loss) / entry * 100
            reward_pct = (take_profit - entry) / entry * 100
        else:
            risk_pct = (stop_loss - entry) / entry * 100
            reward_pct = (entry - take_profit) / entry * 100
        rr = reward_pct / risk_pct if risk_pct > 0 else 0.0
        return risk_pct, reward_pct, rr
