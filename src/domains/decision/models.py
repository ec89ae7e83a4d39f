"""Pydantic models for transaction decisions and their audit entries."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from src.domains.fraud.models import FraudVerdict


class TransactionStatus(StrEnum):
    APPROVED = "APPROVED"
    BLOCKED = "BLOCKED"
    ENROLLED = "ENROLLED"


class TransactionLogEntry(BaseModel):
    """One audit record, emitted for the caller to persist."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    amount: float
    match_score: float
    reason: str
    status: TransactionStatus

    def summary(self, currency: str = "KES") -> str:
        """One-line rendering for logs and exports."""
        return (
            f"[{self.timestamp.isoformat(timespec='seconds')}] {self.status.value}: "
            f"{self.amount:.2f} {currency}, Score: {self.match_score:.3f}, {self.reason}"
        )


class StorageStatistics(BaseModel):
    """Size of the persisted state: enrolled template and audit trail."""

    template_features: int
    total_log_entries: int
    max_log_entries: int

    def summary(self) -> str:
        return (
            "Storage Statistics:\n"
            f"  Face Template: {self.template_features} features\n"
            f"  Transaction Logs: {self.total_log_entries} / {self.max_log_entries}"
        )


class DecisionTimings(BaseModel):
    face_ms: float = 0.0
    fraud_ms: float = 0.0
    total_ms: float = 0.0


class Decision(BaseModel):
    approved: bool
    match_score: float
    reason: str
    face_verified: bool
    fraud_verdict: FraudVerdict
    log_entry: TransactionLogEntry
    timings: DecisionTimings = Field(default_factory=DecisionTimings)
