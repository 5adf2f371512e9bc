"""Pytest configuration, Hypothesis profiles and shared fixtures."""

import logging

import pytest
from hypothesis import settings

from tests.helpers import FakeClock, LogCapture

# Register Hypothesis profiles
settings.register_profile("ci", max_examples=100)
settings.register_profile("dev", max_examples=20)

# Load dev profile by default, CI can override via --hypothesis-profile=ci
settings.load_profile("dev")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def log_capture():
    """Capture records from the stormspout.dispatcher logger.

    The dispatcher logger does not propagate to the root logger, so caplog
    cannot see it.
    """
    logger = logging.getLogger("stormspout.dispatcher")
    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    original_handlers = logger.handlers.copy()
    original_level = logger.level

    logger.addHandler(handler)

    yield handler

    logger.removeHandler(handler)
    logger.handlers = original_handlers
    logger.level = original_level
