"""Decision orchestration configuration."""

import os
from dataclasses import dataclass

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE_VALUES:
        return True
    if v in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {_TRUE_VALUES + _FALSE_VALUES}, got {value!r}")


@dataclass
class DecisionConfig:
    # When both checks fail, report the face mismatch rather than the fraud reason
    face_reason_first: bool = True
    # In-memory audit entries kept before the oldest are dropped
    max_log_entries: int = 1000

    def __post_init__(self) -> None:
        if self.max_log_entries < 1:
            raise ValueError(
                f"max_log_entries must be at least 1, got {self.max_log_entries}"
            )

    @classmethod
    def from_env(cls) -> "DecisionConfig":
        """Load config with env var overrides. Env vars use DECISION_ prefix."""
        kwargs = {}
        if v := os.getenv("DECISION_FACE_REASON_FIRST"):
            kwargs["face_reason_first"] = _parse_bool("DECISION_FACE_REASON_FIRST", v)
        if v := os.getenv("DECISION_MAX_LOG_ENTRIES"):
            kwargs["max_log_entries"] = int(v)
        return cls(**kwargs)


# Module-level default instance
default_config = DecisionConfig()
