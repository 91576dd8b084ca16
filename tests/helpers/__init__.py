"""Test doubles shared across the suite."""

from tests.helpers.mocks import (
    ADVANCE,
    FakeRecorder,
    FakeSink,
    FixedMeasurer,
    RecordingSurface,
    UnavailableRecorder,
)

__all__ = [
    "ADVANCE",
    "FakeRecorder",
    "FakeSink",
    "FixedMeasurer",
    "RecordingSurface",
    "UnavailableRecorder",
]
