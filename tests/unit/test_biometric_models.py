"""Unit tests for descriptor and template models."""

from datetime import UTC, datetime

import numpy as np
import pytest
from pydantic import ValidationError

from src.domains.biometric.models import FeatureDescriptor, MatchResult, Template


class TestFeatureDescriptor:
    def test_exact_field_equality(self):
        a = FeatureDescriptor(x=1.0, y=2.0, descriptor=b"\x01" * 32)
        b = FeatureDescriptor(x=1.0, y=2.0, descriptor=b"\x01" * 32)
        c = FeatureDescriptor(x=1.0, y=2.0, descriptor=b"\x01" * 31 + b"\x03")
        assert a == b
        assert a != c

    def test_hashable_in_sets(self):
        a = FeatureDescriptor(x=1.0, y=2.0, descriptor=bytes(32))
        b = FeatureDescriptor(x=1.0, y=2.0, descriptor=bytes(32))
        assert len({a, b}) == 1

    def test_immutable(self):
        d = FeatureDescriptor(x=1.0, y=2.0, descriptor=bytes(32))
        with pytest.raises(ValidationError):
            d.x = 5.0

    def test_record_uses_float32_coordinates(self):
        d = FeatureDescriptor(x=0.1, y=150.25, descriptor=bytes(32))
        record = d.to_record()
        assert record["x"] == float(np.float32(0.1))
        assert record["y"] == 150.25
        assert record["descriptor"] == bytes(32)


class TestTemplate:
    def test_persistence_shape(self, enrolled_capture):
        template = Template(descriptors=tuple(enrolled_capture))
        records = template.to_records()
        assert len(records) == 60
        assert set(records[0]) == {"x", "y", "descriptor"}

    def test_restore_from_records(self, enrolled_capture):
        enrolled_at = datetime(2026, 1, 15, 14, 0, 0, tzinfo=UTC)
        template = Template(descriptors=tuple(enrolled_capture), enrolled_at=enrolled_at)
        restored = Template.from_records(template.to_records(), enrolled_at=enrolled_at)
        assert len(restored) == len(template)
        assert [d.descriptor for d in restored.descriptors] == [
            d.descriptor for d in template.descriptors
        ]
        assert restored.enrolled_at == enrolled_at

    def test_json_carries_descriptor_bytes(self):
        payload = bytes(range(32))
        template = Template(descriptors=(FeatureDescriptor(x=1.0, y=2.0, descriptor=payload),))
        restored = Template.model_validate_json(template.model_dump_json())
        assert restored.descriptors[0].descriptor == payload


class TestMatchResult:
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            MatchResult(score=1.5, matched=True)

    def test_as_tuple(self):
        assert MatchResult(score=0.8, matched=True).as_tuple() == (0.8, True)
