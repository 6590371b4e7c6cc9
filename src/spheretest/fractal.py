"""
Koch Snowflake Fractal Loops
============================
Generates "Koch snowflake" fractals on the sphere for use as non-trivial test
geometry.

The fractal is obtained by starting with an equilateral triangle and
recursively subdividing each edge into four segments of equal length, so the
shape at level n consists of 3*(4**n) edges. The fractal dimension (between
1.0 and 2.0) controls how far the middle vertex bows out; values between 1.02
and 1.50 are reasonable simulations of various coastlines. The default
(about 1.26) is the standard Koch snowflake.

Multi-level fractals are supported: with a non-negative min level, the
recursive subdivision has an equal probability of stopping at any of the
levels between min and max (inclusive), so the perimeter of the original
triangle is approximately equally divided between the levels. With k distinct
levels, the expected number of edges at level i is about 3*(4**i)/k.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from spheretest.model.geometry_primitives import Loop

if TYPE_CHECKING:
    import numpy.typing as npt
    from spheretest.random_source import Random

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION = math.log(4) / math.log(3)

# Below this dimension the minimum radius is no longer attained at a vertex
# created by the first subdivision step. It is a root of the cubic obtained by
# making the level-1 vertex C of a subdivided edge ABCDE equidistant from the
# origin with the original vertex A.
MIN_DIMENSION_FOR_MIN_RADIUS_AT_LEVEL_1 = 1.0852230903040407


class Fractal:
    """
    A configurable Koch-type fractal loop generator.

    You must call set_max_level() or set_level_for_approx_max_edges() before
    calling make_loop().
    """

    def __init__(self, rnd: Random) -> None:
        """
        Args:
            rnd: Random source deciding where the subdivision stops.
        """
        self.rnd = rnd
        self._max_level: int = -1
        self._min_level_arg: int = -1  # Value set by user
        self._min_level: int = -1  # Actual min level (depends on max level)
        self._dimension: float = DEFAULT_DIMENSION
        # Ratio of the sub-edge length to the original edge length
        self._edge_fraction: float = 0.0
        # Distance from the original edge to the middle vertex, as a fraction
        # of the original edge length
        self._offset_fraction: float = 0.0
        self._compute_offsets()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(max_level={self._max_level}, "
                f"min_level={self._min_level_arg}, dimension={self._dimension:.4f})")

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def min_level(self) -> int:
        """The min level as set by the user (-1 means "same as max level")."""
        return self._min_level_arg

    @property
    def min_level_actual(self) -> int:
        """The level from which the subdivision may stop."""
        return self._min_level

    @property
    def fractal_dimension(self) -> float:
        return self._dimension

    @property
    def edge_fraction(self) -> float:
        return self._edge_fraction

    @property
    def offset_fraction(self) -> float:
        return self._offset_fraction

    def set_max_level(self, max_level: int) -> None:
        """
        Set the maximum subdivision level.

        Raises:
            ValueError: If `max_level` is negative.
        """
        if max_level < 0:
            raise ValueError(f"'max_level' must be non-negative, got {max_level}.")
        self._max_level = max_level
        self._compute_min_level()

    def set_min_level(self, min_level: int) -> None:
        """
        Set the minimum subdivision level. The default of -1 makes the min and
        max levels the same.

        A min level of 0 should be avoided since this creates a significant
        chance that none of the three original edges will be subdivided at all.

        Raises:
            ValueError: If `min_level` is below -1.
        """
        if min_level < -1:
            raise ValueError(f"'min_level' must be >= -1, got {min_level}.")
        if min_level == 0:
            logger.warning("A min level of 0 may leave all three original edges unsubdivided.")
        self._min_level_arg = min_level
        self._compute_min_level()

    def set_level_for_approx_min_edges(self, min_edges: int) -> None:
        """Set the min level to produce approximately `min_edges` edges."""
        self.set_min_level(self._level_for_approx_edges(min_edges))

    def set_level_for_approx_max_edges(self, max_edges: int) -> None:
        """Set the max level to produce approximately `max_edges` edges."""
        self.set_max_level(self._level_for_approx_edges(max_edges))

    def set_fractal_dimension(self, dimension: float) -> None:
        """
        Set the fractal dimension.

        Raises:
            ValueError: If `dimension` is outside [1.0, 2.0).
        """
        if not 1.0 <= dimension < 2.0:
            raise ValueError(f"Fractal dimension must lie in [1.0, 2.0), got {dimension}.")
        if dimension > 1.9:
            logger.warning(f"Fractal dimension {dimension} produces nearly degenerate offsets.")
        self._dimension = dimension
        self._compute_offsets()

    def min_radius_factor(self) -> float:
        """
        Lower bound on Rmin / R, where R is the radius passed to make_loop()
        and Rmin the minimum distance from the boundary to the center, both
        measured in the tangent plane. Use it to inscribe another figure
        within the fractal without intersection.
        """
        # The minimum radius is attained at one of the vertices created by the
        # first subdivision step unless the dimension is too small; the
        # incircle radius of the original triangle is always a lower bound.
        if self._dimension >= MIN_DIMENSION_FOR_MIN_RADIUS_AT_LEVEL_1:
            e = self._edge_fraction
            return math.sqrt(1 + 3 * e * (e - 1))
        return 0.5

    def max_radius_factor(self) -> float:
        """
        Ratio Rmax / R of the farthest boundary point to the nominal radius,
        measured in the tangent plane. Use it to inscribe the fractal within
        another figure without intersection.
        """
        # Attained at an original triangle vertex or at a middle vertex from
        # the first subdivision step
        return max(1.0, self._offset_fraction * math.sqrt(3) + 0.5)

    def get_r2_vertices(self) -> npt.NDArray[np.float64]:
        """
        Vertices of the fractal in the tangent plane, for a nominal radius of 1.

        Returns:
            An array of shape (n, 2); the loop closes from the last vertex back
            to the first one.
        """
        if self._max_level < 0:
            raise RuntimeError("set_max_level() must be called before generating a fractal.")

        # Three Koch curves whose initial edges form an equilateral triangle
        v0 = np.array([1.0, 0.0])
        v1 = np.array([-0.5, math.sqrt(3) / 2])
        v2 = np.array([-0.5, -math.sqrt(3) / 2])

        vertices: list[npt.NDArray[np.float64]] = []
        for start, end in ((v0, v1), (v1, v2), (v2, v0)):
            self._subdivide_edge(start, end, vertices)
        return np.array(vertices)

    def make_loop(self, frame: npt.NDArray[np.float64], nominal_radius: float) -> Loop:
        """
        Return a fractal loop centered around the z-axis of `frame`, with the
        first vertex in the direction of the positive x-axis.

        To avoid self-intersections the fractal is drawn in the plane tangent
        to the sphere at its center and then projected onto the sphere. This
        shrinks the fractal slightly compared to its nominal radius.

        Args:
            frame: (3, 3) orthonormal frame whose columns are the x, y, z axes.
            nominal_radius: Radius of the original triangle in radians.
        """
        r2_vertices = self.get_r2_vertices()
        local = np.c_[r2_vertices * nominal_radius, np.ones(len(r2_vertices))]
        points = local @ np.asarray(frame, dtype=np.float64).T
        points /= np.linalg.norm(points, axis=1)[:, None]
        logger.debug(f"Fractal loop with {len(points)} vertices, nominal radius {nominal_radius}")
        return Loop(points)

    def plot(self) -> None:
        """
        Plot one realization of the fractal in its tangent plane.
        """
        import matplotlib.pyplot as plt

        vertices = self.get_r2_vertices()
        closed = np.vstack((vertices, vertices[:1]))

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(6, 6))

        plt.plot(closed[:, 0], closed[:, 1], 'b', lw=0.8)
        for factor in (self.min_radius_factor(), self.max_radius_factor()):
            circle = plt.Circle((0.0, 0.0), factor, color='gray', fill=False, linestyle=':', lw=0.8)
            fig.gca().add_patch(circle)

        plt.gca().set_aspect('equal')
        plt.title(f"Fractal, dimension {self._dimension:.3f}, {len(vertices)} edges")
        plt.show()

    def _subdivide_edge(
        self,
        v0: npt.NDArray[np.float64],
        v4: npt.NDArray[np.float64],
        vertices: list[npt.NDArray[np.float64]]
    ) -> None:
        """
        Subdivide the edge (v0, v4) and append every vertex of the resulting
        curve up to but not including v4.
        """
        # Sub-edges are pushed in reverse so they are popped in edge order
        stack: list[tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], int]] = [(v0, v4, 0)]
        while stack:
            a, b, level = stack.pop()
            if level >= self._min_level and self.rnd.one_in(self._max_level - level + 1):
                vertices.append(a)
                continue

            direction = b - a
            ortho = np.array([-direction[1], direction[0]])
            a1 = a + self._edge_fraction * direction
            a2 = 0.5 * (a + b) - self._offset_fraction * ortho
            a3 = b - self._edge_fraction * direction
            stack.extend([(a3, b, level + 1), (a2, a3, level + 1), (a1, a2, level + 1), (a, a1, level + 1)])

    def _compute_min_level(self) -> None:
        if 0 <= self._min_level_arg <= self._max_level:
            self._min_level = self._min_level_arg
        else:
            self._min_level = self._max_level

    def _compute_offsets(self) -> None:
        self._edge_fraction = 4.0 ** (-1.0 / self._dimension)
        self._offset_fraction = math.sqrt(self._edge_fraction - 0.25)

    @staticmethod
    def _level_for_approx_edges(num_edges: int) -> int:
        # Map values in the range [3*(4**n)/2, 3*(4**n)*2) to level n
        if num_edges < 3:
            return 0
        return max(0, math.floor(0.5 * math.log2(num_edges // 3) + 0.5))
