"""Biometric matching domain."""

from .config import BiometricConfig, MatchingThresholds
from .hamming import hamming_distance, nearest_distances
from .matcher import BiometricMatcher
from .models import FeatureDescriptor, MatchResult, Template

__all__ = [
    "BiometricConfig",
    "BiometricMatcher",
    "FeatureDescriptor",
    "MatchResult",
    "MatchingThresholds",
    "Template",
    "hamming_distance",
    "nearest_distances",
]
