from __future__ import annotations

from typing import TYPE_CHECKING

from math import pi
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from spheretest.model.geometry_primitives import Loop, normalize

# Arbitrary non-axis-aligned direction, so that ortho() never returns a
# vector parallel to one of the coordinate axes.
_ORTHO_TEMPLATE = (0.012, 0.0053, 0.00457)


def ortho(a: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Return a unit-length vector orthogonal to `a`.

    The result is a deterministic function of `a`, and ortho(-a) == -ortho(a).
    """
    a = np.asarray(a, dtype=np.float64)
    k = (int(np.argmax(np.abs(a))) - 1) % 3
    temp = np.array(_ORTHO_TEMPLATE)
    temp[k] = 1.0
    return normalize(np.cross(a, temp))


def get_frame(z: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Build a right-handed orthonormal frame whose z-axis is `z`.

    Args:
        z: Unit-length z-axis of the frame.

    Returns:
        A (3, 3) array whose columns are the x, y and z axes.
    """
    z = np.asarray(z, dtype=np.float64)
    y = ortho(z)
    x = np.cross(y, z)
    return np.column_stack((x, y, z))


def from_frame(frame: npt.NDArray[np.float64], p: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Convert `p` from frame coordinates to global coordinates."""
    return frame @ np.asarray(p, dtype=np.float64)


def to_frame(frame: npt.NDArray[np.float64], p: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Convert `p` from global coordinates to frame coordinates."""
    # The inverse of an orthonormal matrix is its transpose
    return frame.T @ np.asarray(p, dtype=np.float64)


def latlng_to_point(lat: float, lng: float) -> npt.NDArray[np.float64]:
    """Unit vector for a latitude and longitude given in radians."""
    cos_lat = np.cos(lat)
    return np.array([cos_lat * np.cos(lng), cos_lat * np.sin(lng), np.sin(lat)])


def make_regular_points(
    center: npt.ArrayLike,
    radius: float,
    num_vertices: int
) -> npt.NDArray[np.float64]:
    """
    Points shaped as a regular polygon on a circle around `center`.

    Args:
        center: Unit-length center of the circle.
        radius: Angular radius of the circle in radians, measured along the sphere.
        num_vertices: Number of polygon vertices.

    Returns:
        An array of shape (num_vertices, 3) of unit vectors, counter-clockwise
        around the center.
    """
    if num_vertices < 3:
        raise ValueError(f"A regular polygon needs at least 3 vertices, got {num_vertices}.")

    frame = get_frame(center)
    theta = np.linspace(0.0, 2.0 * pi, num_vertices, endpoint=False)
    local = np.c_[np.sin(radius) * np.cos(theta),
                  np.sin(radius) * np.sin(theta),
                  np.full(num_vertices, np.cos(radius))]
    points = local @ frame.T
    return points / np.linalg.norm(points, axis=1)[:, None]


def concentric_loops(
    center: npt.ArrayLike,
    num_loops: int,
    num_vertices_per_loop: int
) -> list[Loop]:
    """
    Loops sharing the same center, with tangent-plane radii growing up to 0.005.

    Loop `i` has radius 0.005 * (i + 1) / num_loops in the tangent plane at
    `center`, so no two loops intersect.
    """
    if num_loops < 1:
        raise ValueError(f"'num_loops' must be positive, got {num_loops}.")

    frame = get_frame(center)
    theta = np.linspace(0.0, 2.0 * pi, num_vertices_per_loop, endpoint=False)
    loops = []
    for li in range(num_loops):
        radius = 0.005 * (li + 1) / num_loops
        local = np.c_[radius * np.cos(theta), radius * np.sin(theta), np.ones(num_vertices_per_loop)]
        local /= np.linalg.norm(local, axis=1)[:, None]
        loops.append(Loop(local @ frame.T))
    return loops
