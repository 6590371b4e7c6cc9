"""
Geometric Primitives on the Unit Sphere.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


def normalize(v: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Return `v` scaled to unit length (the zero vector is returned unchanged)."""
    v = np.asarray(v, dtype=np.float64)
    mag = np.linalg.norm(v)
    if mag == 0.0:
        return v.copy()
    return v / mag


def angle_between(a: npt.ArrayLike, b: npt.ArrayLike) -> float:
    """Returns the angle in radians between two vectors."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return math.atan2(float(np.linalg.norm(np.cross(a, b))), float(np.dot(a, b)))


@dataclass
class Cap:
    """
    A spherical cap: the points within a given angle of a unit-length center.

    The cap is stored by its height along the center axis, h = 1 - cos(radius),
    which is proportional to its area (2*pi*h).
    """
    center: npt.NDArray[np.float64]
    height: float

    def __post_init__(self) -> None:
        self.center = normalize(self.center)
        if not 0.0 <= self.height <= 2.0:
            raise ValueError(f"Cap height must lie in [0, 2], got {self.height}.")

    @classmethod
    def from_center_angle(cls, center: npt.ArrayLike, radius: float) -> Cap:
        """Construct a cap from its center and angular radius (radians)."""
        if radius < 0.0:
            raise ValueError(f"Cap radius must be non-negative, got {radius}.")
        if radius >= math.pi:
            return cls(center=np.asarray(center, dtype=np.float64), height=2.0)
        # 1 - cos(r) written so that small radii keep their precision
        height = 2.0 * math.sin(0.5 * radius) ** 2
        return cls(center=np.asarray(center, dtype=np.float64), height=height)

    @classmethod
    def from_center_area(cls, center: npt.ArrayLike, area: float) -> Cap:
        """Construct a cap from its center and area (steradians)."""
        return cls(center=np.asarray(center, dtype=np.float64), height=min(2.0, area / (2.0 * math.pi)))

    @property
    def radius(self) -> float:
        """Angular radius of the cap in radians."""
        return 2.0 * math.asin(math.sqrt(0.5 * self.height))

    @property
    def area(self) -> float:
        return 2.0 * math.pi * self.height

    def contains(self, point: npt.ArrayLike) -> bool:
        # Squared chord distance to the center is 2*h on the cap boundary
        d = self.center - np.asarray(point, dtype=np.float64)
        return float(np.dot(d, d)) <= 2.0 * self.height


@dataclass
class LatLngRect:
    """
    A latitude-longitude rectangle, all bounds in radians.

    The longitude interval wraps across the antimeridian when lng_lo > lng_hi.
    """
    lat_lo: float
    lat_hi: float
    lng_lo: float
    lng_hi: float

    def __post_init__(self) -> None:
        if not -math.pi / 2 <= self.lat_lo <= self.lat_hi <= math.pi / 2:
            raise ValueError(f"Invalid latitude interval [{self.lat_lo}, {self.lat_hi}].")
        if abs(self.lng_lo) > math.pi or abs(self.lng_hi) > math.pi:
            raise ValueError(f"Invalid longitude interval [{self.lng_lo}, {self.lng_hi}].")

    @property
    def lng_length(self) -> float:
        if self.lng_lo <= self.lng_hi:
            return self.lng_hi - self.lng_lo
        return self.lng_hi - self.lng_lo + 2.0 * math.pi

    def contains(self, point: npt.ArrayLike) -> bool:
        x, y, z = np.asarray(point, dtype=np.float64)
        lat = math.atan2(z, math.hypot(x, y))
        lng = math.atan2(y, x)
        if not self.lat_lo <= lat <= self.lat_hi:
            return False
        if self.lng_lo <= self.lng_hi:
            return self.lng_lo <= lng <= self.lng_hi
        return lng >= self.lng_lo or lng <= self.lng_hi


class Loop:
    """
    A closed polygonal loop on the unit sphere.

    The last vertex is implicitly connected back to the first one, so the
    vertex sequence never repeats its first point.
    """

    def __init__(self, vertices: npt.ArrayLike) -> None:
        vertices = np.asarray(vertices, dtype=np.float64)
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise ValueError(f"Loop vertices must have shape (n, 3), got {vertices.shape}.")
        if len(vertices) < 3:
            raise ValueError(f"A loop needs at least 3 vertices, got {len(vertices)}.")
        self.vertices: npt.NDArray[np.float64] = vertices

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(num_vertices={self.num_vertices})"

    def __len__(self) -> int:
        return self.num_vertices

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    def vertex(self, i: int) -> npt.NDArray[np.float64]:
        """Vertex `i`, wrapping around so that vertex(n) == vertex(0)."""
        return self.vertices[i % self.num_vertices]

    def edges(self) -> Iterator[tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]]:
        """Iterate over the (start, end) pairs of all edges, closing edge included."""
        for i in range(self.num_vertices):
            yield self.vertex(i), self.vertex(i + 1)

    def append_vertices(self, vertices: List[npt.NDArray[np.float64]]) -> None:
        """Append the vertices of this loop to `vertices`."""
        vertices.extend(v.copy() for v in self.vertices)
