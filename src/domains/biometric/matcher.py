"""Template enrollment and live-capture verification.

Scoring is a nearest-neighbour vote: every template descriptor looks for the
closest live descriptor by Hamming distance and counts as a good match when
that distance is below the configured cutoff. The score is the fraction of
good matches over the template size. Coordinates take no part in scoring.
"""

from collections.abc import Iterable

import structlog

from src.shared.exceptions import InsufficientFeaturesError, NoFeaturesError

from .config import BiometricConfig, default_config
from .hamming import nearest_distances
from .models import FeatureDescriptor, MatchResult, Template

logger = structlog.get_logger()


class BiometricMatcher:
    """Enrolls descriptor sets and scores live captures against a template."""

    def __init__(self, config: BiometricConfig | None = None) -> None:
        self._config = config or default_config

    @property
    def config(self) -> BiometricConfig:
        return self._config

    def enroll(self, descriptors: Iterable[FeatureDescriptor]) -> Template:
        """Build a template from a capture's descriptors.

        Raises NoFeaturesError for an empty capture and
        InsufficientFeaturesError below ``min_features``. The descriptors are
        kept as given.
        """
        features = tuple(descriptors)
        min_features = self._config.matching.min_features

        if not features:
            logger.warning("enrollment_rejected", reason="no_features")
            raise NoFeaturesError(min_features=min_features)

        if len(features) < min_features:
            logger.warning(
                "enrollment_rejected",
                reason="insufficient_features",
                feature_count=len(features),
                min_features=min_features,
            )
            raise InsufficientFeaturesError(len(features), min_features)

        self._warn_if_over_cap(len(features), stage="enroll")
        template = Template(descriptors=features)
        logger.info("face_enrolled", feature_count=len(template))
        return template

    def is_enrolled(self, template: Template | None) -> bool:
        return template is not None and len(template) >= self._config.matching.min_features

    def verify(
        self,
        template: Template | None,
        live_descriptors: Iterable[FeatureDescriptor],
    ) -> MatchResult:
        """Score a live capture against the enrolled template.

        Never raises: a missing template or a thin capture is a non-match
        with score 0.0.
        """
        cfg = self._config.matching
        live = tuple(live_descriptors)

        if not self.is_enrolled(template):
            logger.warning("face_verification_skipped", reason="not_enrolled")
            return MatchResult(
                score=0.0,
                matched=False,
                template_size=len(template) if template is not None else 0,
                live_size=len(live),
                skipped_reason="not_enrolled",
            )

        if len(live) < cfg.min_features:
            logger.warning(
                "face_verification_skipped",
                reason="insufficient_live_features",
                live_size=len(live),
                min_features=cfg.min_features,
            )
            return MatchResult(
                score=0.0,
                matched=False,
                template_size=len(template),
                live_size=len(live),
                skipped_reason="insufficient_live_features",
            )

        # Only the first max_features descriptors of a capture are scored
        self._warn_if_over_cap(len(live), stage="verify")
        scored = live[: cfg.max_features]

        distances = nearest_distances(
            [d.descriptor for d in template.descriptors],
            [d.descriptor for d in scored],
        )
        good_matches = int((distances < cfg.max_hamming_distance).sum())
        score = good_matches / len(template)
        matched = score >= cfg.match_threshold

        logger.info(
            "face_verified",
            score=round(score, 3),
            matched=matched,
            good_matches=good_matches,
            template_size=len(template),
            live_size=len(live),
        )

        return MatchResult(
            score=score,
            matched=matched,
            good_matches=good_matches,
            template_size=len(template),
            live_size=len(live),
        )

    def _warn_if_over_cap(self, count: int, stage: str) -> None:
        max_features = self._config.matching.max_features
        if count > max_features:
            logger.warning(
                "feature_count_above_cap",
                stage=stage,
                feature_count=count,
                max_features=max_features,
            )
