"""Pytest fixtures for textreveal tests."""

from __future__ import annotations

import os

import pytest
from hypothesis import settings as hypothesis_settings

from tests.helpers import FixedMeasurer, RecordingSurface
from textreveal.animation.clock import VirtualClock
from textreveal.config import settings

hypothesis_settings.register_profile("ci", max_examples=200, deadline=None)
hypothesis_settings.register_profile("dev", max_examples=50, deadline=None)
hypothesis_settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def measurer():
    return FixedMeasurer()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def clock():
    # 10 ms frames keep timestamps exact
    return VirtualClock(fps=100)


@pytest.fixture
def assets_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "assets_dir", str(tmp_path))
    return tmp_path
