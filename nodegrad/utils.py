"""
Checking utilities for nodegrad.

numeric_derivative() is public: use it to verify the analytic gradient a
transform returns from backpropagate(), e.g. when adding a new transform.
"""

from typing import Callable


def numeric_derivative(f: Callable[[float], float], x: float, eps: float = 1e-6) -> float:
    """
    Central finite difference (f(x + eps) - f(x - eps)) / 2eps.

    Only meaningful where f is smooth on [x - eps, x + eps].
    """
    return (f(x + eps) - f(x - eps)) / (2.0 * eps)
