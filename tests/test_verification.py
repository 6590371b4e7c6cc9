"""
Tests for the nearest-result verifier.
"""
import logging
import math

import pytest

from spheretest.verification import (
    MismatchKind,
    ResultMismatch,
    check_distance_results,
    check_result_set,
)


def deg(d):
    return math.radians(d)


EXPECTED = [(deg(1), "a"), (deg(2), "b"), (deg(3), "c")]


class TestCheckDistanceResults:

    def test_truncated_at_size_cap(self):
        """Items beyond the size-capped result are not required."""
        actual = [(deg(1), "a"), (deg(2), "b")]
        assert check_distance_results(EXPECTED, actual, 2, deg(10), deg(0))

    def test_missing_item(self, caplog):
        actual = [(deg(1), "a"), (deg(3), "c")]
        mismatches = []
        with caplog.at_level(logging.WARNING, logger="spheretest"):
            ok = check_distance_results(EXPECTED, actual, 2, deg(10), deg(0), mismatches)
        assert not ok
        assert mismatches == [ResultMismatch("Missing", MismatchKind.NOT_FOUND, deg(2), "b")]
        assert "Missing" in caplog.text
        assert "id = b" in caplog.text

    def test_duplicate_item(self):
        actual = [(deg(1), "a"), (deg(1), "a")]
        mismatches = []
        assert not check_distance_results(EXPECTED, actual, 2, deg(10), deg(0), mismatches)
        assert ResultMismatch("Missing", MismatchKind.DUPLICATE, deg(1), "a") in mismatches

    def test_duplicate_fails_even_without_coverage_requirement(self):
        actual = [(deg(1), "a"), (deg(1), "a")]
        expected = [(deg(1), "a")]
        assert not check_distance_results(expected, actual, 2, deg(0.5), deg(5))

    def test_unsorted_result(self):
        actual = [(deg(2), "b"), (deg(1), "a")]
        mismatches = []
        assert not check_distance_results(EXPECTED, actual, 2, deg(10), deg(0), mismatches)
        assert [m.kind for m in mismatches] == [MismatchKind.UNSORTED]

    def test_extra_item(self):
        actual = [(deg(1), "a"), (deg(1.5), "z"), (deg(2), "b"), (deg(3), "c")]
        mismatches = []
        assert not check_distance_results(EXPECTED, actual, 10, deg(10), deg(0), mismatches)
        assert mismatches == [ResultMismatch("Extra", MismatchKind.NOT_FOUND, deg(1.5), "z")]

    def test_both_directions_reported(self):
        actual = [(deg(1), "a"), (deg(1.5), "z")]
        mismatches = []
        assert not check_distance_results(EXPECTED, actual, 10, deg(10), deg(0), mismatches)
        assert {m.label for m in mismatches} == {"Missing", "Extra"}

    def test_not_truncated_requires_everything_within_max_distance(self):
        actual = [(deg(1), "a"), (deg(2), "b")]
        assert not check_distance_results(EXPECTED, actual, 5, deg(10), deg(0))

    def test_items_at_max_distance_are_optional(self):
        actual = [(deg(1), "a"), (deg(2), "b")]
        assert check_distance_results(EXPECTED, actual, 5, deg(3), deg(0))

    def test_max_error_tolerance(self):
        """An approximate query may skip items within max_error of its worst kept item."""
        actual = [(deg(1), "a"), (deg(3), "c")]
        assert not check_distance_results(EXPECTED, actual, 2, deg(10), deg(0.5))
        assert check_distance_results(EXPECTED, actual, 2, deg(10), deg(1.5))

    def test_exact_match(self):
        assert check_distance_results(EXPECTED, list(EXPECTED), 3, deg(10), deg(0))

    def test_empty_results(self):
        assert check_distance_results([], [], 5, deg(10), deg(0))
        assert check_distance_results([], [], 0, deg(10), deg(0))
        assert not check_distance_results(EXPECTED, [], 5, deg(10), deg(0))

    def test_zero_max_size(self):
        assert check_distance_results(EXPECTED, [], 0, deg(10), deg(0))

    def test_non_string_ids(self):
        expected = [(0.1, (3, 4)), (0.2, (1, 2))]
        actual = [(0.1, (3, 4))]
        assert check_distance_results(expected, actual, 1, 1.0, 0.0)
        assert not check_distance_results(expected, [(0.1, (3, 5))], 1, 1.0, 0.0)


class TestCheckResultSet:

    def test_pruning_error_tolerance(self):
        """Items within the pruning error of max_distance may be missed."""
        x = [(0.1, 1)]
        y = [(0.1, 1), (1.0 - 1e-16, 2)]
        assert check_result_set(x, y, 5, 1.0, 0.0, 1e-15, "Missing")
        assert not check_result_set(x, y, 5, 1.0, 0.0, 0.0, "Missing")

    def test_appends_to_existing_list(self):
        mismatches = [ResultMismatch("Earlier", MismatchKind.NOT_FOUND, 0.0, 0)]
        check_result_set([], [(0.1, 7)], 5, 1.0, 0.0, 0.0, "Missing", mismatches)
        assert len(mismatches) == 2
        assert mismatches[-1].id == 7

    def test_mismatch_str(self):
        mismatch = ResultMismatch("Extra", MismatchKind.DUPLICATE, 0.25, "q")
        assert str(mismatch) == "Extra (duplicate) distance = 0.25, id = q"
