"""Pydantic models for the biometric domain."""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


def _as_float32(value: float) -> float:
    return float(np.float32(value))


class FeatureDescriptor(BaseModel):
    """One detected keypoint: its image coordinate and binary descriptor.

    Equality and hashing are exact field comparisons, so two descriptors
    that differ by a single bit are distinct members of a set.
    """

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64", val_json_bytes="base64")

    x: float
    y: float
    descriptor: bytes

    def to_record(self) -> dict[str, Any]:
        """Persistence shape: float32 coordinates plus the raw descriptor bytes."""
        return {
            "x": _as_float32(self.x),
            "y": _as_float32(self.y),
            "descriptor": self.descriptor,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "FeatureDescriptor":
        return cls(
            x=_as_float32(record["x"]),
            y=_as_float32(record["y"]),
            descriptor=bytes(record["descriptor"]),
        )


class Template(BaseModel):
    """Enrolled reference descriptors for the single enrolled identity."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64", val_json_bytes="base64")

    descriptors: tuple[FeatureDescriptor, ...] = ()
    enrolled_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def __len__(self) -> int:
        return len(self.descriptors)

    def to_records(self) -> list[dict[str, Any]]:
        return [d.to_record() for d in self.descriptors]

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        enrolled_at: datetime | None = None,
    ) -> "Template":
        descriptors = tuple(FeatureDescriptor.from_record(r) for r in records)
        if enrolled_at is None:
            return cls(descriptors=descriptors)
        return cls(descriptors=descriptors, enrolled_at=enrolled_at)


class MatchResult(BaseModel):
    score: float = Field(ge=0.0, le=1.0)
    matched: bool
    good_matches: int = 0
    template_size: int = 0
    live_size: int = 0
    # Set when verification short-circuited without scoring
    skipped_reason: str | None = None

    def as_tuple(self) -> tuple[float, bool]:
        return self.score, self.matched
