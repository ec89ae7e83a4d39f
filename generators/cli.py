"""CLI entry point for synthetic data generators.

Usage:
    python -m generators descriptors --count 60 --seed 42
    python -m generators transactions --config configs/default_transactions.yaml --count 50
"""

import argparse
import json
import sys
from pathlib import Path

import yaml


def main() -> None:
    parser = argparse.ArgumentParser(description="biopay-guard synthetic data generators")
    parser.add_argument(
        "generator",
        choices=["descriptors", "transactions"],
        help="Which generator to run",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--count", type=int, default=60, help="Number of records to generate")
    parser.add_argument(
        "--output",
        type=str,
        default="stdout",
        choices=["stdout", "file"],
        help="Output destination",
    )
    parser.add_argument("--output-file", type=str, default=None, help="Output file path")

    args = parser.parse_args()

    config = {}
    if args.config:
        with open(args.config) as f:
            config = yaml.safe_load(f) or {}

    if args.generator == "descriptors":
        from .descriptor_generator import DescriptorGenerator

        gen = DescriptorGenerator(config=config, seed=args.seed)
        records = [d.model_dump(mode="json") for d in gen.capture(args.count)]
    elif args.generator == "transactions":
        from .transaction_generator import TransactionGenerator

        gen = TransactionGenerator(config=config, seed=args.seed)
        records = gen.generate(num_transactions=args.count)
    else:
        print(f"Unknown generator: {args.generator}", file=sys.stderr)
        sys.exit(1)

    if args.output == "stdout":
        for record in records:
            print(json.dumps(record, default=str))
    elif args.output == "file":
        output_path = args.output_file or f"output/{args.generator}.jsonl"
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            for record in records:
                f.write(json.dumps(record, default=str) + "\n")
        print(f"Wrote {len(records)} records to {output_path}", file=sys.stderr)
