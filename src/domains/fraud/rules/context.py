"""Device-context fraud rules."""

from ..config import FraudConfig
from ..history import TransactionHistory
from ..models import RiskSignals, RuleResult
from .base import FraudRule


class SimChangeRule(FraudRule):
    """Rejects any transaction made right after a SIM swap, whatever the amount."""

    rule_id = "sim_change"
    category = "context"

    def evaluate(
        self,
        amount: float,
        signals: RiskSignals,
        history: TransactionHistory,
        config: FraudConfig,
    ) -> RuleResult:
        if signals.sim_changed:
            return self._rejected(
                "SIM card change detected - transaction blocked for security",
                evidence={"sim_changed": True},
            )

        return self._passed("SIM change check passed")
