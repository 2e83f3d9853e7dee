"""Settings (pydantic-settings, loaded from env vars)."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Anthropic ---
    ANTHROPIC_API_KEY: str = ""
    REASONING_MODEL: str = "claude-opus-4-1"
    REASONING_MAX_TOKENS: int = 8192
    REASONING_TEMPERATURE: float = 0.2
    MAX_REASONING_TIMEOUT_SECONDS: float = 120.0

    # --- Instrument Classes ---
    MAJOR_SYMBOLS: list[str] = ["BTCUSDT", "ETHUSDT"]
    MAJOR_LEVERAGE_CAP: int = 5
    ALTCOIN_LEVERAGE_CAP: int = 5

    # --- Decision Guardrails (Hardcoded) ---
    MAJOR_POSITION_EQUITY_MULTIPLE: float = 10.0
    ALTCOIN_POSITION_EQUITY_MULTIPLE: float = 1.5
    POSITION_SIZE_TOLERANCE_PCT: float = 0.01
    MIN_RISK_REWARD_RATIO: float = 2.5
    ASSUMED_ENTRY_FRACTION: float = 0.2

    model_config = {"env_prefix": "", "case_sensitive": True}
