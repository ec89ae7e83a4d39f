"""Fraud detection domain."""

from .config import AnomalyThresholds, FraudConfig, LimitThresholds
from .history import TransactionHistory
from .models import FraudVerdict, HistoryStatistics, RiskSignals, RuleResult
from .rules import ALL_RULES
from .rules_engine import FraudRuleEvaluator

__all__ = [
    "ALL_RULES",
    "AnomalyThresholds",
    "FraudConfig",
    "FraudRuleEvaluator",
    "FraudVerdict",
    "HistoryStatistics",
    "LimitThresholds",
    "RiskSignals",
    "RuleResult",
    "TransactionHistory",
]
