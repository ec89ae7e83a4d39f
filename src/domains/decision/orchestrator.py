"""Per-transaction decision: face verification AND fraud rules.

Both checks always run. A transaction is approved only when the face
matches and every fraud rule passes, and only then does its amount enter the
fraud history. Each call emits a TransactionLogEntry for the caller to
persist.
"""

import threading
import time
from collections.abc import Iterable

import structlog

from src.domains.biometric.matcher import BiometricMatcher
from src.domains.biometric.models import FeatureDescriptor, MatchResult, Template
from src.domains.fraud.models import FraudVerdict, RiskSignals
from src.domains.fraud.rules_engine import FraudRuleEvaluator

from .audit import AuditTrail
from .config import DecisionConfig, default_config
from .models import (
    Decision,
    DecisionTimings,
    StorageStatistics,
    TransactionLogEntry,
    TransactionStatus,
)

logger = structlog.get_logger()

APPROVED_REASON = "Approved: Transaction verified"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class DecisionOrchestrator:
    """Single-user decision pipeline holding the enrolled template and fraud history.

    A lock makes verify + evaluate + record one critical section, so
    concurrent ``decide`` calls on one instance are serialized.
    """

    def __init__(
        self,
        matcher: BiometricMatcher | None = None,
        evaluator: FraudRuleEvaluator | None = None,
        config: DecisionConfig | None = None,
        template: Template | None = None,
        audit: AuditTrail | None = None,
    ) -> None:
        self._config = config or default_config
        self._matcher = matcher or BiometricMatcher()
        self._evaluator = evaluator or FraudRuleEvaluator()
        self._audit = audit or AuditTrail(max_entries=self._config.max_log_entries)
        self._template = template
        self._lock = threading.Lock()

    @property
    def template(self) -> Template | None:
        return self._template

    @property
    def evaluator(self) -> FraudRuleEvaluator:
        return self._evaluator

    @property
    def audit(self) -> AuditTrail:
        return self._audit

    def is_enrolled(self) -> bool:
        return self._matcher.is_enrolled(self._template)

    def enroll(self, descriptors: Iterable[FeatureDescriptor]) -> Template:
        """Enroll a new template, replacing any existing one.

        Enrollment errors propagate and leave the current template untouched.
        """
        start = time.perf_counter()
        with self._lock:
            template = self._matcher.enroll(descriptors)
            replaced = self._template is not None
            self._template = template
            self._audit.append(
                TransactionLogEntry(
                    amount=0.0,
                    match_score=1.0,
                    reason=f"Face enrollment completed with {len(template)} features",
                    status=TransactionStatus.ENROLLED,
                )
            )

        logger.info(
            "enrollment_completed",
            feature_count=len(template),
            replaced_existing=replaced,
            duration_ms=_elapsed_ms(start),
        )
        return template

    def load_template(self, template: Template | None) -> None:
        """Install a template restored from storage without logging an enrollment."""
        with self._lock:
            self._template = template

    def decide(
        self,
        live_descriptors: Iterable[FeatureDescriptor],
        amount: float,
        signals: RiskSignals | None = None,
    ) -> Decision:
        signals = signals or RiskSignals()
        start = time.perf_counter()

        with self._lock:
            face_start = time.perf_counter()
            match = self._matcher.verify(self._template, live_descriptors)
            face_ms = _elapsed_ms(face_start)

            fraud_start = time.perf_counter()
            verdict = self._evaluator.evaluate(amount, signals)
            fraud_ms = _elapsed_ms(fraud_start)

            approved = match.matched and verdict.approved
            if approved:
                self._evaluator.record_accepted(amount)

            reason = self._reason(match, verdict)
            entry = TransactionLogEntry(
                amount=amount,
                match_score=match.score,
                reason=reason,
                status=TransactionStatus.APPROVED if approved else TransactionStatus.BLOCKED,
            )
            self._audit.append(entry)

        timings = DecisionTimings(face_ms=face_ms, fraud_ms=fraud_ms, total_ms=_elapsed_ms(start))

        log = logger.info if approved else logger.warning
        log(
            "transaction_approved" if approved else "transaction_blocked",
            amount=amount,
            face_verified=match.matched,
            match_score=round(match.score, 3),
            fraud_approved=verdict.approved,
            reason=reason,
            face_ms=timings.face_ms,
            fraud_ms=timings.fraud_ms,
            total_ms=timings.total_ms,
        )

        return Decision(
            approved=approved,
            match_score=match.score,
            reason=reason,
            face_verified=match.matched,
            fraud_verdict=verdict,
            log_entry=entry,
            timings=timings,
        )

    def _reason(self, match: MatchResult, verdict: FraudVerdict) -> str:
        face_reason = f"Blocked: Face mismatch (score: {match.score:.3f})"
        fraud_reason = f"Blocked: {verdict.reason}"

        if not match.matched and not verdict.approved:
            return face_reason if self._config.face_reason_first else fraud_reason
        if not match.matched:
            return face_reason
        if not verdict.approved:
            return fraud_reason
        return APPROVED_REASON

    def storage_statistics(self) -> StorageStatistics:
        with self._lock:
            return StorageStatistics(
                template_features=len(self._template) if self._template is not None else 0,
                total_log_entries=len(self._audit),
                max_log_entries=self._audit.max_entries,
            )

    def clear(self) -> None:
        """Destroy the template, the fraud history and the audit trail."""
        with self._lock:
            self._template = None
            self._evaluator.reset()
            self._audit.clear()
        logger.info("all_data_cleared")
