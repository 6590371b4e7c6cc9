"""
Random points, frames and regions on the unit sphere.

Every function draws from the Random instance it is given, so a test that
resets its own source gets the same geometry on every run.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from spheretest.model.geometry_primitives import Cap, LatLngRect, normalize
from spheretest.model.geometry_utils import from_frame, get_frame, latlng_to_point

if TYPE_CHECKING:
    import numpy.typing as npt
    from spheretest.random_source import Random


def random_point(rnd: Random) -> npt.NDArray[np.float64]:
    """Return a random unit-length vector."""
    # The coordinates are drawn one at a time to keep the draw order fixed
    x = rnd.uniform_double(-1, 1)
    y = rnd.uniform_double(-1, 1)
    z = rnd.uniform_double(-1, 1)
    return normalize(np.array([x, y, z]))


def random_frame_at(rnd: Random, z: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Given a unit-length z-axis, compute random x- and y-axes such that (x, y, z)
    is a right-handed coordinate frame.

    Returns:
        A (3, 3) array whose columns are the x, y and z axes.
    """
    z = np.asarray(z, dtype=np.float64)
    x = normalize(np.cross(z, random_point(rnd)))
    y = normalize(np.cross(z, x))
    return np.column_stack((x, y, z))


def random_frame(rnd: Random) -> npt.NDArray[np.float64]:
    """Return a random right-handed coordinate frame (three orthonormal columns)."""
    return random_frame_at(rnd, random_point(rnd))


def random_cap(rnd: Random, min_area: float, max_area: float) -> Cap:
    """
    Return a cap with a random axis such that the log of its area is uniformly
    distributed between the logs of the two given values.
    """
    if not 0.0 < min_area <= max_area:
        raise ValueError(f"Require 0 < min_area <= max_area, got {min_area}, {max_area}.")
    cap_area = max_area * (min_area / max_area) ** rnd.rand_double()
    return Cap.from_center_area(random_point(rnd), cap_area)


def sample_point_in_cap(rnd: Random, cap: Cap) -> npt.NDArray[np.float64]:
    """Return a point chosen uniformly at random (with respect to area) from `cap`."""
    # The cap axis is the frame's z axis. The area of a spherical cap is
    # proportional to its height, so pick a height first and then a point
    # on the circle at that height.
    frame = get_frame(cap.center)
    h = rnd.rand_double() * cap.height
    theta = 2 * math.pi * rnd.rand_double()
    r = math.sqrt(h * (2 - h))
    return normalize(from_frame(frame, [math.cos(theta) * r, math.sin(theta) * r, 1 - h]))


def sample_point_in_rect(rnd: Random, rect: LatLngRect) -> npt.NDArray[np.float64]:
    """
    Return a point chosen uniformly at random (with respect to area on the
    sphere) from the latitude-longitude rectangle `rect`.
    """
    # Latitude uniform with respect to area, then longitude uniform in range
    lat = math.asin(rnd.uniform_double(math.sin(rect.lat_lo), math.sin(rect.lat_hi)))
    lng = rect.lng_lo + rnd.rand_double() * rect.lng_length
    return latlng_to_point(lat, lng)
