"""
Configuration & Global Constants
================================
This module serves as the central registry for the constants shared by the
random source, the verifier and the test setup.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (seeds, tolerances) from being
   scattered throughout the code.
2. Test setup: It resolves the seed a test run should reset its random
   source with, from the environment.

Exports:
    DEFAULT_RANDOM_SEED (int): Seed used by every freshly constructed Random.
    RANDOM_SEED_ENV_VAR (str): Environment variable read by get_random_seed().
    MAX_PRUNING_ERROR (float): Pruning tolerance (radians) of spatial queries.
"""
import logging
import os

logger = logging.getLogger(__name__)

# Global Constants
DEFAULT_RANDOM_SEED: int = 1
RANDOM_SEED_ENV_VAR: str = "SPHERETEST_RANDOM_SEED"

# Distance measurements used for pruning cells are not conservative, so a few
# results right near the distance limit may be missed.
MAX_PRUNING_ERROR: float = 1e-15


def get_random_seed() -> int:
    """
    Get the seed a test or benchmark should pass to Random.reset().

    This does *not* affect the initial seed of a freshly constructed Random,
    which always starts from DEFAULT_RANDOM_SEED.
    """
    value = os.environ.get(RANDOM_SEED_ENV_VAR)
    if value is None:
        return DEFAULT_RANDOM_SEED

    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {RANDOM_SEED_ENV_VAR}={value!r}, using {DEFAULT_RANDOM_SEED}.")
        return DEFAULT_RANDOM_SEED
