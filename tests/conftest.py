"""Pytest configuration and shared fixtures for the tex2md test suite.

This module provides the Hypothesis profiles, custom markers and the
fixtures shared across unit and integration tests.
"""

import logging
import os
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings

from tex2md.options import LatexOptions, NormalizeOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def strict_options() -> NormalizeOptions:
    """Provide normalize options with strict mode enabled."""
    return NormalizeOptions(parser=LatexOptions(strict_mode=True))


@pytest.fixture
def forced_options() -> NormalizeOptions:
    """Provide normalize options that always run the full pipeline."""
    return NormalizeOptions(use_dispatcher=False)


@pytest.fixture
def restore_package_logger() -> Generator[logging.Logger, None, None]:
    """Undo handler and propagation changes made by ``configure_logging``.

    The CLI reconfigures the ``tex2md`` logger; without this fixture later
    tests relying on ``caplog`` would stop seeing records.
    """
    package_logger = logging.getLogger("tex2md")
    yield package_logger
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
