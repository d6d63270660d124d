"""
Load quantization helpers for prescribed and adjusted set loads.

Part of FSE-104: Plate-aware load rounding

Every load the engine writes is snapped to the nearest plate increment
(2.5 by default). Halves round up, matching how lifters load a bar.

Examples:
    >>> round_to_increment(231.0)
    230.0
    >>> scale_load(200, 1.05)
    210.0
    >>> scale_load(None, 0.9) is None
    True
"""

import math
from typing import Optional


# Smallest plate pair that can be added to a barbell
PLATE_INCREMENT = 2.5


def round_to_increment(value: float, increment: float = PLATE_INCREMENT) -> float:
    """
    Round a load to the nearest multiple of ``increment``.

    Args:
        value: Raw load value
        increment: Plate increment (must be positive)

    Returns:
        Load snapped to the increment grid, rounded half up.
    """
    if increment <= 0:
        raise ValueError("Plate increment must be positive")
    steps = math.floor(value / increment + 0.5)
    return round(steps * increment, 4)


def scale_load(
    load: Optional[float],
    factor: float,
    increment: float = PLATE_INCREMENT,
) -> Optional[float]:
    """
    Multiply a load by ``factor`` and snap it to the increment grid.

    Bodyweight sets carry no load and stay ``None``.
    """
    if load is None:
        return None
    return round_to_increment(load * factor, increment)


def volume_load(load: Optional[float], reps: Optional[int]) -> float:
    """Volume-load (load x reps) of a single set; missing values count as zero."""
    return float(load or 0) * float(reps or 0)


def is_quantized(load: Optional[float], increment: float = PLATE_INCREMENT) -> bool:
    """Check that a load sits exactly on the increment grid."""
    if load is None:
        return True
    return math.isclose(load / increment, round(load / increment), abs_tol=1e-9)
