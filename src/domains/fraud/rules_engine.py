"""Short-circuiting fraud rule chain over a sliding window of approved amounts."""

import math
from collections.abc import Iterable

import structlog

from .config import FraudConfig, default_config
from .history import TransactionHistory
from .models import FraudVerdict, HistoryStatistics, RiskSignals, RuleResult
from .rules import ALL_RULES, FraudRule

logger = structlog.get_logger()

APPROVED_REASON = "Transaction approved"
SYSTEM_ERROR_REASON = "System error - transaction blocked for security"
SYSTEM_ERROR_CODE = "system_error"


class FraudRuleEvaluator:
    """Evaluates a transaction amount against the ordered fraud rule chain.

    Rules run in order and evaluation stops at the first rejection, so later
    rules are never consulted for a rejected transaction. ``evaluate`` never
    touches the history; callers append approved amounts through
    ``record_accepted`` once the overall decision is known.

    Any unexpected fault while evaluating yields a rejected verdict. The
    evaluator is not thread-safe: serialize ``evaluate`` + ``record_accepted``
    or give each context its own instance.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        rules: list[FraudRule] | None = None,
        history: Iterable[float] = (),
    ) -> None:
        self._config = config or default_config
        self._rules = list(rules if rules is not None else ALL_RULES)
        self._history = TransactionHistory(
            max_size=self._config.anomaly.max_history, amounts=history
        )
        logger.info(
            "fraud_evaluator_initialized",
            rule_count=len(self._rules),
            history_size=len(self._history),
        )

    @property
    def config(self) -> FraudConfig:
        return self._config

    @property
    def history(self) -> list[float]:
        """Oldest-first copy of the approved-amount window."""
        return self._history.snapshot()

    def evaluate(self, amount: float, signals: RiskSignals | None = None) -> FraudVerdict:
        signals = signals or RiskSignals()
        logger.debug("fraud_evaluation_started", amount=amount, sim_changed=signals.sim_changed)

        try:
            return self._run_chain(amount, signals)
        except Exception:
            logger.exception("fraud_evaluation_error", amount=amount)
            return FraudVerdict(
                approved=False,
                reason=SYSTEM_ERROR_REASON,
                error_code=SYSTEM_ERROR_CODE,
            )

    def _run_chain(self, amount: float, signals: RiskSignals) -> FraudVerdict:
        if not math.isfinite(amount):
            raise ValueError(f"Transaction amount must be finite, got {amount!r}")

        results: list[RuleResult] = []
        for rule in self._rules:
            result = rule.evaluate(amount, signals, self._history, self._config)
            results.append(result)
            if not result.passed:
                logger.warning(
                    "transaction_rejected_by_rule",
                    rule_id=rule.rule_id,
                    amount=amount,
                    reason=result.reason,
                )
                return FraudVerdict(approved=False, reason=result.reason, rule_results=results)

        logger.info("rules_evaluated", amount=amount, rule_count=len(results), approved=True)
        return FraudVerdict(approved=True, reason=APPROVED_REASON, rule_results=results)

    def record_accepted(self, amount: float) -> None:
        """Append an approved amount, evicting the oldest past the window size."""
        self._history.append(amount)
        logger.debug("history_updated", amount=amount, history_size=len(self._history))

    def check_transaction(
        self, amount: float, signals: RiskSignals | None = None
    ) -> FraudVerdict:
        """Evaluate and, when approved, record the amount in one step.

        For callers that use the evaluator without a biometric check in front.
        """
        verdict = self.evaluate(amount, signals)
        if verdict.approved:
            self.record_accepted(amount)
        return verdict

    def load_history(self, amounts: Iterable[float]) -> None:
        """Replace the window with previously persisted amounts, oldest first.

        Raises ValueError on a non-finite amount and keeps the current window.
        """
        self._history = TransactionHistory(max_size=self._history.max_size, amounts=amounts)
        logger.info("history_loaded", history_size=len(self._history))

    def reset(self) -> None:
        self._history.clear()
        logger.info("fraud_state_reset")

    def statistics(self) -> HistoryStatistics:
        return HistoryStatistics(
            transaction_count=len(self._history),
            daily_limit=self._config.limits.daily_limit,
            historical_mean=self._history.mean(),
            standard_deviation=self._history.stddev(),
            sigma_threshold=self._config.anomaly.sigma_threshold,
        )
