"""Shared test fixtures for biopay-guard tests."""

import pytest
import structlog

from generators.descriptor_generator import DescriptorGenerator
from src.domains.biometric.models import FeatureDescriptor


@pytest.fixture(autouse=True)
def _silent_structlog():
    """Keep structlog output off stdout so CLI output stays parseable."""
    structlog.configure(
        processors=[structlog.processors.JSONRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


def make_descriptor(payload: bytes, x: float = 10.0, y: float = 20.0) -> FeatureDescriptor:
    return FeatureDescriptor(x=x, y=y, descriptor=payload)


@pytest.fixture
def generator() -> DescriptorGenerator:
    return DescriptorGenerator(seed=7)


@pytest.fixture
def enrolled_capture(generator) -> list[FeatureDescriptor]:
    """60 well-formed 32-byte descriptors."""
    return generator.capture(60)


@pytest.fixture
def foreign_capture(generator) -> list[FeatureDescriptor]:
    """60 descriptors at least 64 bits away from every enrolled descriptor."""
    return generator.foreign(60)
