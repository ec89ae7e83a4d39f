"""Statistical distribution helpers for realistic data generation."""

import random


def log_normal_sample(
    mean: float, std: float, min_val: float = 0.01, max_val: float | None = None
) -> float:
    value = random.lognormvariate(mean, std)
    value = max(value, min_val)
    if max_val is not None:
        value = min(value, max_val)
    return value
