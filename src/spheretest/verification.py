"""
Nearest-Result Verification
===========================
Compares two sets of "closest" items, where "expected" is computed via brute
force (considering every possible candidate) and "actual" is computed using a
spatial data structure.

Results are (distance, id) pairs with distances in radians. Mismatches are
reported through the module logger and, optionally, collected as
ResultMismatch records; they are never raised, so a test can keep checking
after the first failure.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
from typing import Hashable, List, Optional, Sequence, Tuple, TypeVar

from spheretest.config import MAX_PRUNING_ERROR

logger = logging.getLogger(__name__)

Id = TypeVar("Id", bound=Hashable)
DistanceResult = Tuple[float, Id]


class MismatchKind(StrEnum):
    UNSORTED = "unsorted"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not found"


@dataclass(frozen=True)
class ResultMismatch:
    """A single discrepancy found while checking a result set."""
    label: str
    kind: MismatchKind
    distance: float
    id: Hashable

    def __str__(self) -> str:
        return f"{self.label} ({self.kind}) distance = {self.distance}, id = {self.id}"


def check_result_set(
    x: Sequence[DistanceResult],
    y: Sequence[DistanceResult],
    max_size: int,
    max_distance: float,
    max_error: float,
    max_pruning_error: float,
    label: str,
    mismatches: Optional[List[ResultMismatch]] = None
) -> bool:
    """
    Check that result set `x` contains all the expected results from `y`, and
    does not include any duplicate results.

    Args:
        x: Candidate results, which must be sorted by distance.
        y: Reference results.
        max_size: Bound on the number of items in a result set.
        max_distance: Limit on the distance to any item (radians).
        max_error: Error allowed when selecting the closest items (radians).
        max_pruning_error: Extra tolerance for non-conservative pruning (radians).
        label: Prefix of every reported mismatch, e.g. "Missing" or "Extra".
        mismatches: Optional list that collects every mismatch found.

    Returns:
        True if `x` passes all checks.
    """
    found: List[ResultMismatch] = []

    # Results should be sorted by distance
    for prev, cur in zip(x, x[1:]):
        if cur[0] < prev[0]:
            found.append(ResultMismatch(label, MismatchKind.UNSORTED, cur[0], cur[1]))

    # Make sure there are no duplicate values
    seen: dict[DistanceResult, int] = {}
    for p in x:
        seen[p] = seen.get(p, 0) + 1
        if seen[p] == 2:
            found.append(ResultMismatch(label, MismatchKind.DUPLICATE, p[0], p[1]))

    # Result set X should contain all the items from Y whose distance is less
    # than the limit computed below
    limit = 0.0
    if len(x) < max_size:
        # X was not limited by "max_size", so it should contain all the items
        # up to "max_distance", except for a few right near the limit
        limit = max_distance - max_pruning_error
    elif x:
        # X contains only the closest "max_size" items, to within a tolerance
        # of "max_error + max_pruning_error"
        limit = x[-1][0] - max_error - max_pruning_error

    for p in y:
        if p[0] < limit and seen.get(p, 0) != 1:
            found.append(ResultMismatch(label, MismatchKind.NOT_FOUND, p[0], p[1]))

    for mismatch in found:
        logger.warning(str(mismatch))
    if mismatches is not None:
        mismatches.extend(found)
    return not found


def check_distance_results(
    expected: Sequence[DistanceResult],
    actual: Sequence[DistanceResult],
    max_size: int,
    max_distance: float,
    max_error: float,
    mismatches: Optional[List[ResultMismatch]] = None
) -> bool:
    """
    Compare a brute-force result set against one from a spatial query.

    Args:
        expected: Every (distance, id) pair within `max_distance`, sorted by distance.
        actual: The result under test.
        max_size: Bound on the maximum number of items.
        max_distance: Limit on the distance to any item (radians).
        max_error: Maximum error allowed when selecting which items are closest (radians).
        mismatches: Optional list that collects every mismatch found.

    Returns:
        True if `actual` is missing no required item and contains no extra one.
    """
    missing_ok = check_result_set(
        actual, expected, max_size, max_distance, max_error,
        MAX_PRUNING_ERROR, "Missing", mismatches
    )
    # Both directions always run so that every mismatch gets reported
    extra_ok = check_result_set(
        expected, actual, max_size, max_distance, max_error,
        0.0, "Extra", mismatches
    )
    return missing_ok and extra_ok
