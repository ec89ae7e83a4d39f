"""Amount-based fraud rules."""

from ..config import FraudConfig
from ..history import TransactionHistory
from ..models import RiskSignals, RuleResult
from .base import FraudRule


class DailyLimitRule(FraudRule):
    """Rejects single transactions above the daily limit."""

    rule_id = "daily_limit"
    category = "amount"

    def evaluate(
        self,
        amount: float,
        signals: RiskSignals,
        history: TransactionHistory,
        config: FraudConfig,
    ) -> RuleResult:
        limit = config.limits.daily_limit

        if amount > limit:
            return self._rejected(
                f"Amount exceeds daily limit of {limit:g} {config.limits.currency}",
                evidence={"amount": amount, "limit": limit},
            )

        return self._passed("Daily limit check passed")
