"""
Shared fixtures for the spheretest suite.
"""
from __future__ import annotations

import logging

import matplotlib
import pytest

# Plots are rendered off-screen during tests
matplotlib.use("Agg")

from spheretest.config import RANDOM_SEED_ENV_VAR, get_random_seed  # noqa: E402
from spheretest.logging_config import MISMATCH_LOGGER_NAME, setup_logging  # noqa: E402
from spheretest.random_source import Random  # noqa: E402


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--random-seed",
        type=int,
        default=None,
        help=f"Seed for the 'rnd' fixture (default: ${RANDOM_SEED_ENV_VAR} or 1)",
    )
    parser.addoption(
        "--mismatch-log",
        default=None,
        help="Collect every nearest-result mismatch of the session in this file",
    )


def pytest_configure(config: pytest.Config) -> None:
    mismatch_log = config.getoption("--mismatch-log")
    if mismatch_log:
        setup_logging(level=logging.WARNING, mismatch_log_file=mismatch_log)


@pytest.fixture()
def seed(request: pytest.FixtureRequest) -> int:
    value = request.config.getoption("--random-seed")
    return get_random_seed() if value is None else value


@pytest.fixture()
def rnd(seed: int) -> Random:
    """A random source owned by a single test, reset with the session seed."""
    source = Random()
    source.reset(seed)
    return source


@pytest.fixture()
def clean_package_logger():
    """Restore the 'spheretest' loggers after a test that configures them."""
    logger = logging.getLogger("spheretest")
    mismatch_logger = logging.getLogger(MISMATCH_LOGGER_NAME)
    saved = {
        lg: (lg.level, lg.propagate, list(lg.handlers)) for lg in (logger, mismatch_logger)
    }
    # A session-wide mismatch log is detached while the test reconfigures logging
    mismatch_logger.handlers.clear()
    yield logger
    for lg, (level, propagate, handlers) in saved.items():
        for handler in lg.handlers:
            if handler not in handlers:
                handler.close()
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate
