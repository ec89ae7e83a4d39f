"""Unit tests for biometric enrollment and verification."""

import random

import pytest
from structlog.testing import capture_logs

from src.domains.biometric.config import BiometricConfig, MatchingThresholds
from src.domains.biometric.matcher import BiometricMatcher
from src.domains.biometric.models import FeatureDescriptor, Template
from src.shared.exceptions import EnrollmentError, InsufficientFeaturesError, NoFeaturesError
from tests.conftest import make_descriptor

MATCHER = BiometricMatcher(BiometricConfig())


def _flip_bits(payload: bytes, count: int) -> bytes:
    """Flip the lowest ``count`` bits, one per byte from the start."""
    data = bytearray(payload)
    for i in range(count):
        data[i % len(data)] ^= 1 << (i // len(data))
    return bytes(data)


class TestEnroll:
    def test_empty_capture_raises_no_features(self):
        with pytest.raises(NoFeaturesError) as exc_info:
            MATCHER.enroll([])
        assert exc_info.value.error_code == "ENROLL_001"
        assert exc_info.value.feature_count == 0

    @pytest.mark.parametrize("count", [1, 25, 49])
    def test_below_minimum_raises_insufficient(self, enrolled_capture, count):
        with pytest.raises(InsufficientFeaturesError) as exc_info:
            MATCHER.enroll(enrolled_capture[:count])
        assert exc_info.value.feature_count == count
        assert exc_info.value.context["min_features"] == 50
        assert isinstance(exc_info.value, EnrollmentError)

    def test_at_minimum_succeeds(self, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture[:50])
        assert len(template) == 50

    def test_descriptors_kept_unchanged(self, enrolled_capture):
        duplicated = enrolled_capture + enrolled_capture[:5]
        template = MATCHER.enroll(duplicated)
        assert list(template.descriptors) == duplicated

    def test_accepts_any_iterable(self, enrolled_capture):
        template = MATCHER.enroll(iter(enrolled_capture))
        assert len(template) == 60

    def test_configurable_minimum(self, enrolled_capture):
        matcher = BiometricMatcher(BiometricConfig(MatchingThresholds(min_features=10)))
        assert len(matcher.enroll(enrolled_capture[:10])) == 10


class TestVerify:
    def test_no_template_is_zero_non_match(self, enrolled_capture):
        result = MATCHER.verify(None, enrolled_capture)
        assert result.as_tuple() == (0.0, False)
        assert result.skipped_reason == "not_enrolled"

    def test_undersized_template_treated_as_absent(self, enrolled_capture):
        thin = Template(descriptors=tuple(enrolled_capture[:10]))
        result = MATCHER.verify(thin, enrolled_capture)
        assert result.as_tuple() == (0.0, False)
        assert result.skipped_reason == "not_enrolled"

    def test_thin_live_capture_is_zero_non_match(self, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        result = MATCHER.verify(template, enrolled_capture[:49])
        assert result.as_tuple() == (0.0, False)
        assert result.skipped_reason == "insufficient_live_features"

    def test_empty_live_capture_is_not_an_error(self, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        assert MATCHER.verify(template, []).as_tuple() == (0.0, False)

    def test_identical_capture_scores_one(self, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        result = MATCHER.verify(template, enrolled_capture)
        assert result.score == 1.0
        assert result.matched
        assert result.good_matches == 60

    def test_order_does_not_matter(self, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        shuffled = list(enrolled_capture)
        random.Random(5).shuffle(shuffled)
        assert MATCHER.verify(template, shuffled).score == 1.0

    def test_coordinates_ignored(self, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        moved = [
            FeatureDescriptor(x=d.x + 50.0, y=d.y - 50.0, descriptor=d.descriptor)
            for d in enrolled_capture
        ]
        assert MATCHER.verify(template, moved).score == 1.0

    def test_foreign_capture_scores_zero(self, enrolled_capture, foreign_capture):
        template = MATCHER.enroll(enrolled_capture)
        result = MATCHER.verify(template, foreign_capture)
        assert result.score == 0.0
        assert not result.matched

    def test_noisy_recapture_matches(self, generator, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        result = MATCHER.verify(template, generator.noisy_copy(enrolled_capture, flip_bits=10))
        assert result.score == 1.0
        assert result.matched

    def test_distance_cutoff_is_strict(self):
        base = make_descriptor(bytes(32))
        template = Template(descriptors=(base,) * 50)
        at_cutoff = [make_descriptor(_flip_bits(base.descriptor, 50))] * 50
        assert MATCHER.verify(template, at_cutoff).good_matches == 0
        just_below = [make_descriptor(_flip_bits(base.descriptor, 49))] * 50
        assert MATCHER.verify(template, just_below).good_matches == 50

    def test_partial_match_below_threshold(self, enrolled_capture, foreign_capture):
        template = MATCHER.enroll(enrolled_capture)
        # 36 of 60 template descriptors find their twin: 0.6 < 0.7
        live = enrolled_capture[:36] + foreign_capture[:24]
        result = MATCHER.verify(template, live)
        assert result.score == pytest.approx(0.6)
        assert not result.matched

    def test_score_at_threshold_matches(self, enrolled_capture, foreign_capture):
        template = MATCHER.enroll(enrolled_capture)
        live = enrolled_capture[:42] + foreign_capture[:18]
        result = MATCHER.verify(template, live)
        assert result.score == pytest.approx(0.7)
        assert result.matched

    def test_configurable_match_threshold(self, enrolled_capture, foreign_capture):
        lenient = BiometricMatcher(BiometricConfig(MatchingThresholds(match_threshold=0.5)))
        template = lenient.enroll(enrolled_capture)
        live = enrolled_capture[:36] + foreign_capture[:24]
        assert lenient.verify(template, live).matched

    def test_is_enrolled(self, enrolled_capture):
        assert not MATCHER.is_enrolled(None)
        assert not MATCHER.is_enrolled(Template(descriptors=tuple(enrolled_capture[:3])))
        assert MATCHER.is_enrolled(MATCHER.enroll(enrolled_capture))


class TestFeatureCap:
    CAPPED = BiometricMatcher(BiometricConfig(MatchingThresholds(max_features=100)))

    def test_only_first_max_features_are_scored(self, generator, enrolled_capture):
        template = self.CAPPED.enroll(enrolled_capture)
        live = generator.foreign(100) + enrolled_capture
        result = self.CAPPED.verify(template, live)
        assert result.as_tuple() == (0.0, False)
        assert result.live_size == 160

    def test_leading_descriptors_within_cap_match(self, generator, enrolled_capture):
        template = self.CAPPED.enroll(enrolled_capture)
        live = enrolled_capture + generator.foreign(100)
        assert self.CAPPED.verify(template, live).as_tuple() == (1.0, True)

    def test_over_cap_logs_warning(self, generator, enrolled_capture):
        template = self.CAPPED.enroll(enrolled_capture)
        with capture_logs() as logs:
            self.CAPPED.verify(template, enrolled_capture + generator.foreign(100))
        warnings = [e for e in logs if e["event"] == "feature_count_above_cap"]
        assert len(warnings) == 1
        assert warnings[0]["stage"] == "verify"
        assert warnings[0]["feature_count"] == 160
        assert warnings[0]["max_features"] == 100

    def test_large_capture_verifies_without_error(self, generator, enrolled_capture):
        template = MATCHER.enroll(enrolled_capture)
        live = generator.noisy_copy(enrolled_capture) + generator.foreign(20_000)
        result = MATCHER.verify(template, live)
        assert result.matched
        assert result.live_size == 20_060
