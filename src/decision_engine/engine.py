"""Parse and validate a full model response into a DecisionBatch."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from decision_engine.config import Settings
from decision_engine.errors import DecisionEngineError, DecodeError, ExtractionError
from decision_engine.extraction import extract_cot_trace, extract_decisions
from decision_engine.models.decision import Decision, DecisionBatch, ValidationConfig
from decision_engine.reasoning_client import ReasoningClient
from decision_engine.validator import DecisionValidator

logger = structlog.get_logger()


def parse_full_decision_response(response: str, config: ValidationConfig) -> DecisionBatch:
    """Run split -> extract -> normalize -> decode -> validate on one response.

    Any failure is re-raised with the narrative and the decoded decisions
    attached, so the model's reasoning survives a rejected cycle.
    """
    narrative = extract_cot_trace(response)
    decisions: list[Decision] = []

    try:
        decisions = extract_decisions(response)
        DecisionValidator(config).validate(decisions)
    except DecisionEngineError as e:
        e.narrative = narrative
        e.decisions = list(decisions)
        _log_failure(e, response)
        raise

    logger.info(
        "decision_batch_parsed",
        decisions=len(decisions),
        actions=[d.action for d in decisions],
    )
    return DecisionBatch(narrative=narrative, decisions=decisions)


def _log_failure(error: DecisionEngineError, response: str) -> None:
    if isinstance(error, ExtractionError):
        logger.warning(
            "decision_extraction_failed", reason=error.reason, raw_text=response[:200]
        )
    elif isinstance(error, DecodeError):
        logger.warning("decision_decode_failed", content=error.content[:200])
    else:
        logger.warning(
            "decision_validation_failed",
            index=error.index,
            symbol=error.symbol,
            rule=type(error).__name__,
            reason=error.reason,
        )


class DecisionEngine:
    def __init__(self, settings: Settings, client: ReasoningClient | None = None) -> None:
        self.settings = settings
        self.client = client or ReasoningClient(settings)

    async def get_full_decision(
        self, system_prompt: str, user_prompt: str, account_equity: float
    ) -> DecisionBatch:
        """Call the reasoning model once and return its validated decisions.

        Errors from the core propagate unchanged; the caller treats them as
        "no actionable decision this cycle".
        """
        config = ValidationConfig.from_settings(self.settings, account_equity)
        response = await self.client.complete(system_prompt, user_prompt)

        batch = parse_full_decision_response(response, config)
        batch.user_prompt = user_prompt
        batch.timestamp = datetime.now(timezone.utc)
        return batch
