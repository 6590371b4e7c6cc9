"""Command-line demo: generate a fractal loop and report its statistics."""
from __future__ import annotations

import argparse
import logging
import math
from typing import Optional, Sequence

import numpy as np

from spheretest.config import get_random_seed
from spheretest.dev import timer
from spheretest.fractal import DEFAULT_DIMENSION, Fractal
from spheretest.logging_config import setup_logging
from spheretest.model.geometry_primitives import angle_between
from spheretest.random_source import Random
from spheretest.sampling import random_frame

logger = logging.getLogger("spheretest.demo")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spheretest", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: environment or 1)")
    parser.add_argument("--max-level", type=int, default=3)
    parser.add_argument("--min-level", type=int, default=-1)
    parser.add_argument("--dimension", type=float, default=DEFAULT_DIMENSION)
    parser.add_argument("--radius-deg", type=float, default=10.0, help="Nominal radius in degrees")
    parser.add_argument("--plot", action="store_true", help="Show the tangent-plane fractal")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


@timer
def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    rnd = Random()
    rnd.reset(get_random_seed() if args.seed is None else args.seed)

    fractal = Fractal(rnd)
    fractal.set_max_level(args.max_level)
    fractal.set_min_level(args.min_level)
    fractal.set_fractal_dimension(args.dimension)

    frame = random_frame(rnd)
    loop = fractal.make_loop(frame, math.radians(args.radius_deg))

    center = frame[:, 2]
    distances = np.array([angle_between(center, v) for v in loop.vertices])
    logger.info(f"{fractal}: {loop.num_vertices} vertices")
    logger.info(
        f"Radius range {math.degrees(distances.min()):.4f} - {math.degrees(distances.max()):.4f} deg "
        f"(bounds {fractal.min_radius_factor() * args.radius_deg:.4f} - "
        f"{fractal.max_radius_factor() * args.radius_deg:.4f} deg)"
    )

    if args.plot:
        fractal.plot()


if __name__ == "__main__":
    main()
