"""Real roots of a quadratic equation.

Used by the sphere intersection test, which reduces
``|p + t*d - center|^2 = r^2`` to ``a*t^2 + b*t + c = 0``.
"""

import math


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, ...]:
    """Solve ``a*t^2 + b*t + c = 0`` for real t.

    Args:
        a: Quadratic coefficient. Must be non-zero.
        b: Linear coefficient.
        c: Constant term.

    Returns:
        ``(t0, t1)`` when the discriminant is positive (unordered),
        ``(t,)`` when it is zero, and ``()`` when it is negative.

    Raises:
        ValueError: If ``a`` is zero, which happens for a zero ray direction.
    """
    if a == 0.0:
        raise ValueError("Degenerate quadratic: a == 0 (zero-length ray direction?)")

    discriminant = b * b - 4.0 * a * c
    if discriminant > 0.0:
        sqrt_d = math.sqrt(discriminant)
        return ((-b + sqrt_d) / (2.0 * a), (-b - sqrt_d) / (2.0 * a))
    if discriminant == 0.0:
        return (-b / (2.0 * a),)
    return ()
