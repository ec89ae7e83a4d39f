"""Base generator class with seeded RNG."""

import random
from typing import Any

import numpy as np


class BaseGenerator:
    def __init__(self, config: dict[str, Any] | None = None, seed: int = 42):
        self.config = config or {}
        self.seed = seed
        random.seed(seed)
        self.rng = np.random.default_rng(seed)

    def _weighted_choice(self, options: dict[str, float]) -> str:
        """Choose from weighted options."""
        items = list(options.keys())
        weights = list(options.values())
        return random.choices(items, weights=weights, k=1)[0]
