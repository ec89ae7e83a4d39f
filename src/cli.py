"""Command-line scenario runner.

Usage:
    python -m src.cli simulate --scenario configs/demo_scenario.yaml
    python -m src.cli config

``simulate`` enrolls a synthetic face and pushes a list of transactions
through the decision pipeline, printing one JSON line per decision.
"""

import argparse
import json
import sys
from dataclasses import asdict
from typing import Any

import structlog
import yaml

from generators.descriptor_generator import DescriptorGenerator
from generators.transaction_generator import TransactionGenerator
from src.config import settings
from src.domains.biometric.config import BiometricConfig
from src.domains.biometric.matcher import BiometricMatcher
from src.domains.decision.config import DecisionConfig
from src.domains.decision.orchestrator import DecisionOrchestrator
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import RiskSignals
from src.domains.fraud.rules_engine import FraudRuleEvaluator
from src.shared.exceptions import EnrollmentError
from src.shared.logging import setup_logging

logger = structlog.get_logger()


def build_orchestrator() -> DecisionOrchestrator:
    """Wire the pipeline from environment-driven configs."""
    return DecisionOrchestrator(
        matcher=BiometricMatcher(BiometricConfig.from_env()),
        evaluator=FraudRuleEvaluator(FraudConfig.from_env()),
        config=DecisionConfig.from_env(),
    )


def run_scenario(scenario: dict[str, Any], seed: int = 42) -> list[dict[str, Any]]:
    """Run a scenario and return one JSON-ready record per step."""
    orchestrator = build_orchestrator()
    descriptors = DescriptorGenerator(scenario.get("descriptors"), seed=seed)

    if history := scenario.get("history"):
        orchestrator.evaluator.load_history(history)

    enrollment = scenario.get("enrollment") or {"features": 60}
    enrolled_capture = descriptors.capture(enrollment.get("features", 60))
    records: list[dict[str, Any]] = []

    try:
        orchestrator.enroll(enrolled_capture)
        records.append({"step": "enroll", "enrolled": True, "features": len(enrolled_capture)})
    except EnrollmentError as exc:
        records.append({"step": "enroll", "enrolled": False, "error": exc.to_dict()})

    transactions = list(scenario.get("transactions") or [])
    if generate := scenario.get("generate"):
        gen = TransactionGenerator(generate, seed=seed)
        transactions.extend(gen.generate(num_transactions=generate.get("count", 20)))

    live_size = enrollment.get("features", 60)
    for txn in transactions:
        capture = txn.get("capture", "same")
        if capture == "same":
            live = descriptors.noisy_copy(enrolled_capture, flip_bits=txn.get("flip_bits", 8))
        elif capture == "foreign":
            live = descriptors.foreign(live_size)
        elif capture == "empty":
            live = []
        else:
            raise ValueError(f"Unknown capture kind: {capture}")

        decision = orchestrator.decide(
            live,
            float(txn["amount"]),
            RiskSignals(sim_changed=bool(txn.get("sim_changed", False))),
        )
        records.append(
            {
                "step": "decide",
                "capture": capture,
                "approved": decision.approved,
                "match_score": round(decision.match_score, 3),
                "reason": decision.reason,
                "log_entry": decision.log_entry.model_dump(mode="json"),
            }
        )

    records.append(
        {
            "step": "statistics",
            **orchestrator.evaluator.statistics().model_dump(),
            "storage": orchestrator.storage_statistics().model_dump(),
        }
    )
    return records


def effective_config() -> dict[str, Any]:
    return {
        "app": {"name": settings.app_name, "version": settings.app_version},
        "biometric": asdict(BiometricConfig.from_env()),
        "fraud": asdict(FraudConfig.from_env()),
        "decision": asdict(DecisionConfig.from_env()),
    }


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="biopay-guard decision engine")
    sub = parser.add_subparsers(dest="command", required=True)

    simulate = sub.add_parser("simulate", help="Run a YAML scenario through the pipeline")
    simulate.add_argument("--scenario", type=str, required=True, help="Path to YAML scenario")
    simulate.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")

    sub.add_parser("config", help="Print the effective configuration as JSON")

    args = parser.parse_args(argv)
    setup_logging(settings.log_level, json_logs=settings.log_json)

    if args.command == "config":
        print(json.dumps(effective_config(), indent=2))
        return

    with open(args.scenario) as f:
        scenario = yaml.safe_load(f) or {}

    try:
        records = run_scenario(scenario, seed=args.seed)
    except ValueError as exc:
        logger.error("scenario_failed", scenario=args.scenario, error=str(exc))
        sys.exit(1)

    for record in records:
        print(json.dumps(record, default=str))


if __name__ == "__main__":
    main()
