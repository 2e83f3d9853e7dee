"""Entry point: replay a saved model response through the decision engine."""

import argparse
import sys

import structlog

from decision_engine.config import Settings
from decision_engine.engine import parse_full_decision_response
from decision_engine.errors import DecisionEngineError, DecisionValidationError
from decision_engine.models.decision import ValidationConfig

logger = structlog.get_logger()


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not number > 0 or number == float("inf"):
        raise argparse.ArgumentTypeError(f"must be a positive finite number, got {value}")
    return number


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate a raw reasoning-model response.")
    parser.add_argument("--equity", type=_positive_float, required=True, help="account equity in USDT")
    parser.add_argument("path", nargs="?", help="response file (stdin if omitted)")
    args = parser.parse_args(argv)

    # stdout carries the batch JSON
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))

    if args.path:
        with open(args.path, encoding="utf-8") as f:
            response = f.read()
    else:
        response = sys.stdin.read()

    config = ValidationConfig.from_settings(Settings(), args.equity)

    try:
        batch = parse_full_decision_response(response, config)
    except DecisionEngineError as e:
        fields = {"stage": e.stage, "error": type(e).__name__, "message": e.message}
        if isinstance(e, DecisionValidationError):
            fields["index"] = e.index
        logger.error("replay_rejected", decisions=len(e.decisions), **fields)
        print(e.narrative)
        return 1

    print(batch.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
