"""Biometric matching configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class MatchingThresholds:
    """Descriptor matching parameters.

    Defaults are tuned for 256-bit ORB descriptors.
    """

    # Fewer descriptors than this never enroll and never get scored
    min_features: int = 50
    # Extraction-side cap on descriptors per capture
    max_features: int = 500
    # A template descriptor counts as matched when its nearest live
    # neighbour is strictly closer than this many bits
    max_hamming_distance: int = 50
    # Fraction of matched template descriptors needed to accept a face
    match_threshold: float = 0.7

    def __post_init__(self) -> None:
        if self.min_features < 1:
            raise ValueError(f"min_features must be at least 1, got {self.min_features}")
        if self.max_features < self.min_features:
            raise ValueError(
                f"max_features ({self.max_features}) must be >= "
                f"min_features ({self.min_features})"
            )
        if self.max_hamming_distance < 0:
            raise ValueError(
                f"max_hamming_distance cannot be negative, got {self.max_hamming_distance}"
            )
        if not 0.0 <= self.match_threshold <= 1.0:
            raise ValueError(
                f"match_threshold must be within [0.0, 1.0], got {self.match_threshold}"
            )


@dataclass
class BiometricConfig:
    matching: MatchingThresholds = field(default_factory=MatchingThresholds)

    @classmethod
    def from_env(cls) -> "BiometricConfig":
        """Load config with env var overrides. Env vars use BIOMETRIC_ prefix."""
        matching = MatchingThresholds()

        if v := os.getenv("BIOMETRIC_MIN_FEATURES"):
            matching.min_features = int(v)
        if v := os.getenv("BIOMETRIC_MAX_FEATURES"):
            matching.max_features = int(v)
        if v := os.getenv("BIOMETRIC_MAX_HAMMING_DISTANCE"):
            matching.max_hamming_distance = int(v)
        if v := os.getenv("BIOMETRIC_MATCH_THRESHOLD"):
            matching.match_threshold = float(v)

        # Re-run validation against the overridden values
        return cls(matching=MatchingThresholds(**vars(matching)))


# Module-level default instance
default_config = BiometricConfig()
