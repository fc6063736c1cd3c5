"""
Chebyshev series evaluation.

Every stored item is a set of 2 or 3 series (one per component) over the
same granule, so all of them are evaluated in one Clenshaw pass.
"""

import numpy as np


def normalize_time(t: float, start: float, width: float) -> float:
    """Map t in [start, start + width] onto the Chebyshev domain [-1, 1]."""
    return 2.0 * (t - start) / width - 1.0


def evaluate_components(coeffs: np.ndarray, x: float) -> np.ndarray:
    """Evaluate several Chebyshev series sharing one argument.

    Args:
        coeffs: Array of shape (components, coefficient_count), one series per
            row, lowest degree first
        x: Point to evaluate at, must be in [-1, 1]

    Returns:
        Array of shape (components,) with one value per series

    Raises:
        ValueError: If x is outside [-1, 1]
    """
    if not -1 <= x <= 1:
        raise ValueError("x must be in [-1, 1]")

    # chebval runs the recurrence along the first axis, so coefficients
    # go in as (coefficient_count, components)
    return np.polynomial.chebyshev.chebval(x, coeffs.T)
