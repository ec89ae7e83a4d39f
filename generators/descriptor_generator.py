"""Synthetic ORB-style captures for demos and tests.

Stands in for the camera and feature detector: produces descriptor sets for
an enrolled face, re-captures of the same face with bit noise, and captures
of a different face that cannot match.
"""

from typing import Any

import numpy as np

from src.domains.biometric.models import FeatureDescriptor

from .base import BaseGenerator

DESCRIPTOR_BYTES = 32
IMAGE_SIZE = 200.0


class DescriptorGenerator(BaseGenerator):
    def __init__(self, config: dict[str, Any] | None = None, seed: int = 42):
        super().__init__(config, seed)
        self.descriptor_bytes = self.config.get("descriptor_bytes", DESCRIPTOR_BYTES)

    def _point(self) -> tuple[float, float]:
        x, y = self.rng.uniform(0.0, IMAGE_SIZE, size=2)
        return float(x), float(y)

    def capture(self, count: int) -> list[FeatureDescriptor]:
        """A capture of the reference face.

        The first quarter of every payload is zeroed so that foreign captures,
        whose first quarter is all ones, sit at least a quarter of the bit
        width away (64 bits for 32-byte descriptors). The random remainder
        keeps descriptors of one capture far apart from each other.
        """
        prefix = self.descriptor_bytes // 4
        descriptors = []
        for _ in range(count):
            tail = self.rng.integers(0, 256, size=self.descriptor_bytes - prefix, dtype=np.uint8)
            x, y = self._point()
            descriptors.append(
                FeatureDescriptor(x=x, y=y, descriptor=bytes(prefix) + tail.tobytes())
            )
        return descriptors

    def noisy_copy(
        self, descriptors: list[FeatureDescriptor], flip_bits: int = 8
    ) -> list[FeatureDescriptor]:
        """Re-capture of the same face: each payload has ``flip_bits`` bits flipped."""
        noisy = []
        for d in descriptors:
            bits = np.unpackbits(np.frombuffer(d.descriptor, dtype=np.uint8))
            positions = self.rng.choice(bits.size, size=min(flip_bits, bits.size), replace=False)
            bits[positions] ^= 1
            noisy.append(
                FeatureDescriptor(x=d.x, y=d.y, descriptor=np.packbits(bits).tobytes())
            )
        return noisy

    def foreign(self, count: int) -> list[FeatureDescriptor]:
        """A capture of a different face, far from anything ``capture`` produces."""
        prefix = self.descriptor_bytes // 4
        descriptors = []
        for _ in range(count):
            tail = self.rng.integers(0, 256, size=self.descriptor_bytes - prefix, dtype=np.uint8)
            x, y = self._point()
            descriptors.append(
                FeatureDescriptor(x=x, y=y, descriptor=b"\xff" * prefix + tail.tobytes())
            )
        return descriptors
