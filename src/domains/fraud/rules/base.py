"""Abstract base class for fraud rules."""

from abc import ABC, abstractmethod

from ..config import FraudConfig
from ..history import TransactionHistory
from ..models import RiskSignals, RuleResult


class FraudRule(ABC):
    """Base class for all fraud rules.

    A rule inspects one transaction against the signals, the approved-amount
    window, and the config, and either passes it or rejects it with a
    human-readable reason. Rules never mutate the history.
    """

    rule_id: str
    category: str  # "amount" | "context" | "statistical"

    @abstractmethod
    def evaluate(
        self,
        amount: float,
        signals: RiskSignals,
        history: TransactionHistory,
        config: FraudConfig,
    ) -> RuleResult:
        """Evaluate this rule and return a RuleResult."""
        ...

    def _passed(self, reason: str, evidence: dict | None = None) -> RuleResult:
        """Convenience: return a passing result for this rule."""
        return RuleResult(
            rule_name=self.rule_id,
            passed=True,
            reason=reason,
            category=self.category,
            evidence=evidence or {},
        )

    def _rejected(self, reason: str, evidence: dict | None = None) -> RuleResult:
        """Convenience: return a rejecting result for this rule."""
        return RuleResult(
            rule_name=self.rule_id,
            passed=False,
            reason=reason,
            category=self.category,
            evidence=evidence or {},
        )
