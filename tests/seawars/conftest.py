from __future__ import annotations

import random

import pytest

from tests.seawars.helpers import FakeClock, RecordingPresentation, RecordingSink


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def presentation() -> RecordingPresentation:
    return RecordingPresentation()
