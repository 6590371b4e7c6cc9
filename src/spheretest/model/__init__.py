"""
The MODEL layer contains the geometric value objects used by the generators.
Points on the unit sphere are numpy arrays of shape (3,); coordinate frames
are (3, 3) arrays whose columns are the x, y and z axes.
"""
from spheretest.model.geometry_primitives import Cap, LatLngRect, Loop, angle_between, normalize
from spheretest.model.geometry_utils import (
    concentric_loops,
    from_frame,
    get_frame,
    latlng_to_point,
    make_regular_points,
    ortho,
    to_frame,
)

__all__ = [
    "Cap",
    "LatLngRect",
    "Loop",
    "angle_between",
    "normalize",
    "concentric_loops",
    "from_frame",
    "get_frame",
    "latlng_to_point",
    "make_regular_points",
    "ortho",
    "to_frame",
]
