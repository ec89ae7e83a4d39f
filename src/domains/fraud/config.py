"""Fraud rule configuration with sensible defaults."""

import math
import os
from dataclasses import dataclass, field


@dataclass
class LimitThresholds:
    # Single-transaction ceiling; amounts strictly above it are rejected
    daily_limit: float = 10_000.0
    currency: str = "KES"

    def __post_init__(self) -> None:
        if not math.isfinite(self.daily_limit) or self.daily_limit < 0:
            raise ValueError(
                f"daily_limit must be a finite non-negative number, got {self.daily_limit}"
            )
        if not self.currency:
            raise ValueError("currency cannot be empty")


@dataclass
class AnomalyThresholds:
    """Sliding-window statistical anomaly parameters."""

    # Reject when |amount - mean| / stddev exceeds this
    sigma_threshold: float = 3.0
    # Below this many approved amounts the anomaly check always passes
    min_history_size: int = 5
    # Sliding window length; oldest amounts are evicted first
    max_history: int = 100

    def __post_init__(self) -> None:
        if not math.isfinite(self.sigma_threshold) or self.sigma_threshold <= 0:
            raise ValueError(
                f"sigma_threshold must be a finite positive number, got {self.sigma_threshold}"
            )
        # Bessel-corrected stddev needs at least two samples
        if self.min_history_size < 2:
            raise ValueError(
                f"min_history_size must be at least 2, got {self.min_history_size}"
            )
        if self.max_history < self.min_history_size:
            raise ValueError(
                f"max_history ({self.max_history}) must be >= "
                f"min_history_size ({self.min_history_size})"
            )


@dataclass
class FraudConfig:
    limits: LimitThresholds = field(default_factory=LimitThresholds)
    anomaly: AnomalyThresholds = field(default_factory=AnomalyThresholds)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Limit overrides
        limits = vars(config.limits).copy()
        if v := os.getenv("FRAUD_DAILY_LIMIT"):
            limits["daily_limit"] = float(v)
        if v := os.getenv("FRAUD_CURRENCY"):
            limits["currency"] = v
        config.limits = LimitThresholds(**limits)

        # Anomaly overrides
        anomaly = vars(config.anomaly).copy()
        if v := os.getenv("FRAUD_SIGMA_THRESHOLD"):
            anomaly["sigma_threshold"] = float(v)
        if v := os.getenv("FRAUD_MIN_HISTORY_SIZE"):
            anomaly["min_history_size"] = int(v)
        if v := os.getenv("FRAUD_MAX_HISTORY"):
            anomaly["max_history"] = int(v)
        config.anomaly = AnomalyThresholds(**anomaly)

        return config


# Module-level default instance
default_config = FraudConfig()
