"""
Shared test fixtures and helpers for the Fluxor test suite.
"""

import logging
import sys
from pathlib import Path
from typing import Any, List, Tuple

import pytest

# sample_app lives next to this file
sys.path.insert(0, str(Path(__file__).parent))

from fluxor.di import ServiceCollection
from fluxor.dependency_injection import Options


# ============================================================================
# Registration Helpers
# ============================================================================


class RecordingSink:
    """Registration sink that records calls instead of touching a container."""

    def __init__(self, scope: str = "recording"):
        self._scope = scope
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    @property
    def scope(self) -> str:
        return self._scope

    def by_type(self, service_type):
        self.calls.append(("by_type", (service_type,)))

    def by_type_and_implementation(self, service_type, implementation_type):
        self.calls.append(("by_type_and_implementation", (service_type, implementation_type)))

    def by_factory(self, service_type, factory):
        self.calls.append(("by_factory", (service_type, factory)))

    @property
    def registered(self) -> List[Any]:
        return [args[0] for _, args in self.calls]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def services():
    return ServiceCollection()


@pytest.fixture
def options(services):
    return Options(services)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def recording_options(options, recording_sink):
    """Options whose registrations land in a RecordingSink."""
    options.use_registration(recording_sink)
    return options


@pytest.fixture(autouse=True)
def reset_fluxor_logger():
    """Undo any handlers/levels the CLI installs on the fluxor logger."""
    logger = logging.getLogger("fluxor")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
