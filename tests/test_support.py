"""
Tests for configuration, unit conversions, logging setup, timing and the
command-line demo.
"""
import logging
import math

import pytest
import matplotlib.pyplot as plt

from spheretest import config
from spheretest.__main__ import main, parse_args
from spheretest.dev import get_cpu_time, timer
from spheretest.logging_config import MISMATCH_LOGGER_NAME, setup_logging
from spheretest.random_source import Random
from spheretest.utils import EARTH_RADIUS_KM, area_to_km2, area_to_m2, km_to_angle, meters_to_angle
from spheretest.verification import check_distance_results


class TestUnits:

    def test_distance_to_angle(self):
        assert km_to_angle(EARTH_RADIUS_KM) == pytest.approx(1.0)
        assert meters_to_angle(1000.0) == pytest.approx(km_to_angle(1.0))
        # A quarter of the circumference is a right angle
        assert km_to_angle(0.5 * math.pi * EARTH_RADIUS_KM) == pytest.approx(math.pi / 2)

    def test_area(self):
        assert area_to_km2(4 * math.pi) == pytest.approx(4 * math.pi * EARTH_RADIUS_KM**2)
        assert area_to_m2(1.0) == pytest.approx(1e6 * area_to_km2(1.0))


class TestConfig:

    def test_default_seed(self, monkeypatch):
        monkeypatch.delenv(config.RANDOM_SEED_ENV_VAR, raising=False)
        assert config.get_random_seed() == config.DEFAULT_RANDOM_SEED

    def test_seed_from_environment(self, monkeypatch):
        monkeypatch.setenv(config.RANDOM_SEED_ENV_VAR, "-12")
        assert config.get_random_seed() == -12

    def test_invalid_seed_in_environment(self, monkeypatch, caplog):
        monkeypatch.setenv(config.RANDOM_SEED_ENV_VAR, "abc")
        with caplog.at_level(logging.WARNING, logger="spheretest"):
            assert config.get_random_seed() == config.DEFAULT_RANDOM_SEED
        assert "abc" in caplog.text

    def test_rnd_fixture_uses_seed(self, rnd, seed):
        assert rnd.rand32() == Random(seed).rand32()


class TestLoggingConfig:

    def test_no_duplicate_handlers(self, clean_package_logger):
        setup_logging()
        setup_logging(level=logging.DEBUG)
        assert len(clean_package_logger.handlers) == 1
        assert clean_package_logger.level == logging.DEBUG

    def test_log_file(self, clean_package_logger, tmp_path):
        log_file = tmp_path / "spheretest.log"
        setup_logging(log_file=str(log_file))
        logging.getLogger("spheretest.fractal").info("hello from the fractal")
        for handler in clean_package_logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "spheretest.fractal - INFO - hello from the fractal" in text

    def test_propagate(self, clean_package_logger):
        setup_logging(propagate=False)
        assert not clean_package_logger.propagate
        setup_logging()
        assert clean_package_logger.propagate

    def test_mismatch_log_file(self, clean_package_logger, tmp_path):
        """Only verifier mismatches end up in the mismatch log, even when running quiet."""
        mismatch_file = tmp_path / "mismatches.log"
        setup_logging(level=logging.ERROR, mismatch_log_file=str(mismatch_file))
        logging.getLogger("spheretest.fractal").warning("unrelated warning")
        expected = [(0.1, "a"), (0.2, "b")]
        assert not check_distance_results(expected, [(0.1, "a")], 5, 1.0, 0.0)
        for handler in logging.getLogger(MISMATCH_LOGGER_NAME).handlers:
            handler.flush()
        lines = mismatch_file.read_text(encoding="utf-8").splitlines()
        assert lines == ["Missing (not found) distance = 0.2, id = b"]

    def test_mismatch_log_replaced_on_reconfigure(self, clean_package_logger, tmp_path):
        setup_logging(mismatch_log_file=str(tmp_path / "first.log"))
        setup_logging(mismatch_log_file=str(tmp_path / "second.log"))
        assert len(logging.getLogger(MISMATCH_LOGGER_NAME).handlers) == 1


class TestDev:

    def test_cpu_time_increases(self):
        start = get_cpu_time()
        sum(i * i for i in range(200000))
        assert get_cpu_time() >= start >= 0.0

    def test_timer(self, caplog):
        @timer
        def work(x):
            return 2 * x

        with caplog.at_level(logging.INFO, logger="spheretest"):
            assert work(21) == 42
        assert "work finished in" in caplog.text
        assert work.__name__ == "work"


class TestDemo:

    def test_parse_args_defaults(self):
        args = parse_args([])
        assert args.seed is None
        assert args.max_level == 3
        assert args.min_level == -1
        assert not args.plot

    def test_main(self, clean_package_logger, caplog):
        with caplog.at_level(logging.INFO, logger="spheretest"):
            main(["--seed", "5", "--max-level", "2", "--radius-deg", "5"])
        assert "48 vertices" in caplog.text
        assert "Radius range" in caplog.text

    def test_main_with_plot(self, clean_package_logger, monkeypatch):
        shown = []
        monkeypatch.setattr(plt, "show", lambda: shown.append(True))
        main(["--max-level", "3", "--min-level", "1", "--plot"])
        assert shown == [True]
        plt.close("all")
