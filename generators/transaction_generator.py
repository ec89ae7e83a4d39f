"""Transaction request generator with fraud injection."""

import random
from typing import Any

from .base import BaseGenerator
from .utils.distributions import log_normal_sample


class TransactionGenerator(BaseGenerator):
    """Produces transaction requests for a simulated session.

    Each request carries an amount, the SIM-change signal, and the kind of
    face capture presented: ``same`` (noisy re-capture of the enrolled
    face), ``foreign`` (someone else), or ``empty`` (no usable features).
    """

    def generate(self, num_transactions: int = 20) -> list[dict[str, Any]]:
        config = self.config
        amount_dist = config.get(
            "amount_distribution", {"log_normal_mean": 6.0, "log_normal_std": 0.4}
        )
        max_amount = config.get("max_amount", 50_000.0)
        sim_change_rate = config.get("sim_change_rate", 0.05)
        large_amount_rate = config.get("large_amount_rate", 0.05)
        capture_weights = config.get(
            "capture_weights", {"same": 0.85, "foreign": 0.10, "empty": 0.05}
        )

        transactions = []
        for _ in range(num_transactions):
            amount = log_normal_sample(
                amount_dist["log_normal_mean"], amount_dist["log_normal_std"], min_val=1.0
            )
            # Fraud injection: occasional amounts far above the daily limit
            if random.random() < large_amount_rate:
                amount = random.uniform(10_001.0, max_amount)

            transactions.append(
                {
                    "amount": round(amount, 2),
                    "sim_changed": random.random() < sim_change_rate,
                    "capture": self._weighted_choice(capture_weights),
                }
            )
        return transactions
