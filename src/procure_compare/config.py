"""
Tunable parameters for the comparison engine.

Defaults suit a single-currency (INR) deployment with an 18% GST rate.
Each value can be overridden through a PROCURE_* environment variable.
"""

import logging
import math
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        parsed = math.nan
    if not math.isfinite(parsed):
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default
    return parsed


def _env_decimal(name: str, default: Decimal) -> Decimal:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = Decimal(value)
    except InvalidOperation:
        parsed = Decimal("NaN")
    if not parsed.is_finite():
        logger.warning(f"Ignoring invalid {name}={value!r}, using {default}")
        return default
    return parsed


@dataclass
class EngineConfig:
    """Engine settings shared by the parser, matcher and cost calculator."""

    # Quote lines scoring below this are left unmatched. Zero still rejects
    # a zero score: a quote line with no shared tokens is never assigned.
    match_min_score: float = 0.0

    # GST is not read from quote text; every parsed line gets this rate.
    default_gst_percent: Decimal = Decimal("18")

    currency: str = "INR"
    log_level: str = "INFO"

    def __post_init__(self):
        if not 0.0 <= self.match_min_score <= 1.0:
            raise ValueError(f"match_min_score must be in [0, 1], got {self.match_min_score}")
        gst = Decimal(self.default_gst_percent)
        if not gst.is_finite() or gst < 0:
            raise ValueError(f"default_gst_percent must be a finite value >= 0, got {self.default_gst_percent}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from PROCURE_* environment variables."""
        min_score = _env_float("PROCURE_MATCH_MIN_SCORE", 0.0)
        if not 0.0 <= min_score <= 1.0:
            logger.warning(f"PROCURE_MATCH_MIN_SCORE={min_score} outside [0, 1], using 0.0")
            min_score = 0.0

        gst = _env_decimal("PROCURE_DEFAULT_GST", Decimal("18"))
        if gst < 0:
            logger.warning(f"PROCURE_DEFAULT_GST={gst} is negative, using 18")
            gst = Decimal("18")

        log_level = os.getenv("PROCURE_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning(f"Unknown PROCURE_LOG_LEVEL={log_level!r}, using INFO")
            log_level = "INFO"

        return cls(
            match_min_score=min_score,
            default_gst_percent=gst,
            currency=os.getenv("PROCURE_CURRENCY", "INR"),
            log_level=log_level,
        )
