"""Transaction decision domain: composes face verification and fraud rules."""

from .audit import AuditTrail
from .config import DecisionConfig
from .models import (
    Decision,
    DecisionTimings,
    StorageStatistics,
    TransactionLogEntry,
    TransactionStatus,
)
from .orchestrator import DecisionOrchestrator

__all__ = [
    "AuditTrail",
    "Decision",
    "DecisionConfig",
    "DecisionOrchestrator",
    "DecisionTimings",
    "StorageStatistics",
    "TransactionLogEntry",
    "TransactionStatus",
]
