"""Pydantic models for the fraud domain."""

from pydantic import BaseModel, Field


class RiskSignals(BaseModel):
    """Contextual risk signals supplied by the device alongside a transaction."""

    sim_changed: bool = False


class RuleResult(BaseModel):
    rule_name: str
    passed: bool
    reason: str
    category: str = ""
    evidence: dict = Field(default_factory=dict)


class FraudVerdict(BaseModel):
    approved: bool
    reason: str
    rule_results: list[RuleResult] = []
    # Set only when evaluation failed internally and the verdict fell back to a block
    error_code: str | None = None

    @property
    def failed_rule(self) -> RuleResult | None:
        for result in self.rule_results:
            if not result.passed:
                return result
        return None


class HistoryStatistics(BaseModel):
    """Snapshot of the sliding window and the limits it is judged against."""

    transaction_count: int
    daily_limit: float
    historical_mean: float
    standard_deviation: float
    sigma_threshold: float

    def summary(self) -> str:
        return (
            "Fraud Detection Statistics:\n"
            f"  Transactions: {self.transaction_count}\n"
            f"  Daily Limit: {self.daily_limit:g}\n"
            f"  Historical Mean: {self.historical_mean:.2f}\n"
            f"  Std Deviation: {self.standard_deviation:.2f}\n"
            f"  Sigma Threshold: {self.sigma_threshold}σ"
        )
