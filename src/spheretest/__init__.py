"""
Deterministic test-support kernel for algorithms on the unit sphere:
a reproducible random source, Koch-type fractal loops and a checker for
nearest-item query results.
"""
from spheretest.fractal import Fractal
from spheretest.random_source import Random
from spheretest.verification import ResultMismatch, check_distance_results

__all__ = ["Fractal", "Random", "ResultMismatch", "check_distance_results"]
