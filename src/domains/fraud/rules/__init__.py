"""Fraud rules package.

Exports ALL_RULES (rule instances in evaluation order) and the individual
rule classes for direct use.
"""

from .amount import DailyLimitRule
from .anomaly import StatisticalAnomalyRule
from .base import FraudRule
from .context import SimChangeRule

# All rule instances in evaluation order; the chain stops at the first rejection
ALL_RULES: list[FraudRule] = [
    DailyLimitRule(),
    SimChangeRule(),
    StatisticalAnomalyRule(),
]

__all__ = [
    "ALL_RULES",
    "FraudRule",
    "DailyLimitRule",
    "SimChangeRule",
    "StatisticalAnomalyRule",
]
