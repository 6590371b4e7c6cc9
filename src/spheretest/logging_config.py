"""
Logging Configuration
Sets up the package logger for scripts and test sessions.
"""
import logging
import sys
from typing import Optional

# Logger that reports discrepancies found by the nearest-result verifier
MISMATCH_LOGGER_NAME = "spheretest.verification"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    *,
    propagate: bool = True,
    mismatch_log_file: Optional[str] = None
) -> None:
    """
    Configures the root logger for the 'spheretest' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        propagate: Whether records also reach the root logger. Test sessions
            keep this on so pytest's log capture still sees them.
        mismatch_log_file: Optional path that collects only the result
            mismatches reported by check_distance_results(), so a long test
            run leaves one list of every failing (distance, id) pair.
    """
    logger = logging.getLogger("spheretest")
    logger.setLevel(level)
    logger.propagate = propagate

    # Repeated calls (e.g. one per test session) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if mismatch_log_file:
        mismatch_logger = logging.getLogger(MISMATCH_LOGGER_NAME)
        for handler in list(mismatch_logger.handlers):
            mismatch_logger.removeHandler(handler)
            handler.close()
        # Mismatches are logged at WARNING, which must pass even when the
        # package runs quieter than that
        mismatch_logger.setLevel(logging.WARNING)
        mismatch_handler = logging.FileHandler(mismatch_log_file, mode='w', encoding='utf-8')
        mismatch_handler.setLevel(logging.WARNING)
        mismatch_handler.setFormatter(logging.Formatter('%(message)s'))
        mismatch_logger.addHandler(mismatch_handler)

    logger.info("Logging initialized.")
