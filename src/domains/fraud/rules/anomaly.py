"""Statistical outlier rule over the approved-amount window."""

import math

import structlog

from ..config import FraudConfig
from ..history import TransactionHistory
from ..models import RiskSignals, RuleResult
from .base import FraudRule

logger = structlog.get_logger()


class StatisticalAnomalyRule(FraudRule):
    """Rejects amounts more than ``sigma_threshold`` sample stddevs from the mean.

    Passes while the window is still warming up. A window with zero spread
    cannot flag anything, so the deviation is taken as 0 there.
    """

    rule_id = "statistical_anomaly"
    category = "statistical"

    def evaluate(
        self,
        amount: float,
        signals: RiskSignals,
        history: TransactionHistory,
        config: FraudConfig,
    ) -> RuleResult:
        cfg = config.anomaly

        if len(history) < cfg.min_history_size:
            logger.debug(
                "anomaly_check_warming_up",
                history_size=len(history),
                min_history_size=cfg.min_history_size,
            )
            return self._passed(
                "Statistical check skipped - building history",
                evidence={"history_size": len(history)},
            )

        mean = history.mean()
        stddev = history.stddev()
        if not (math.isfinite(mean) and math.isfinite(stddev)):
            raise ValueError(f"History statistics are not finite: mean={mean}, stddev={stddev}")
        deviation = abs(amount - mean) / stddev if stddev > 0 else 0.0
        if not math.isfinite(deviation):
            raise ValueError(f"Deviation is not finite for amount {amount!r}")

        evidence = {
            "amount": amount,
            "mean": mean,
            "stddev": stddev,
            "deviation": deviation,
            "history_size": len(history),
        }

        if deviation > cfg.sigma_threshold:
            return self._rejected(
                f"Transaction anomaly detected ({deviation:.1f}σ deviation)",
                evidence=evidence,
            )

        return self._passed("Statistical anomaly check passed", evidence=evidence)
