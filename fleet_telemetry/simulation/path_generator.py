"""Bounded random-walk paths, one per vehicle, generated at startup."""

from typing import Tuple

import numpy as np

from fleet_telemetry.config.constants import PATH_STEP_MAX, PATH_STEPS
from fleet_telemetry.config.schema import GeoBounds, LatLng

Path = Tuple[LatLng, ...]


def generate_path(
    bounds: GeoBounds,
    rng: np.random.Generator,
    steps: int = PATH_STEPS,
    max_step: float = PATH_STEP_MAX,
) -> Path:
    """Random-walk a fixed-length path inside bounds.

    The walk starts from a uniform random position; every point is the
    previous one plus U(-max_step, +max_step) per axis, clamped per axis.

    Args:
        bounds: Envelope every point must stay within.
        rng: Random number generator.
        steps: Number of points in the path.
        max_step: Half-width of the per-axis offset in degrees.

    Returns:
        Tuple of `steps` positions.
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    current = bounds.random_position(rng)
    points = []
    for _ in range(steps):
        current = bounds.clamp(
            current.lat + rng.uniform(-max_step, max_step),
            current.lng + rng.uniform(-max_step, max_step),
        )
        points.append(current)
    return tuple(points)
