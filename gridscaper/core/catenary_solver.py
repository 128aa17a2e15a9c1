"""Catenary shape solver for hanging conductors.

A conductor hanging between two supports at equal height follows
y(u) = a·cosh(u/a). Its midspan sag over a horizontal span L is

    s(a) = a·(cosh(L/2a) − 1)

Given L and a desired sag s, the solver finds the shape parameter a with
Newton-Raphson iteration seeded from the parabolic approximation a₀ = L²/(8s).

The solver never raises. When the iteration cap is reached it returns its last
estimate; for realistic spans and sags the result is within solver tolerance.
"""

import logging
from dataclasses import dataclass
from math import cosh, sinh

from gridscaper.constants import CatenaryConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatenarySolution:
    """Result of a catenary parameter solve.

    Attributes:
        parameter: Catenary parameter a (horizontal tension / weight per length)
        iterations: Newton iterations performed
        converged: Whether the update fell below tolerance before the cap
    """

    parameter: float
    iterations: int
    converged: bool


class CatenarySolver:
    """Static methods for solving and evaluating the catenary sag equation."""

    @staticmethod
    def sag_for_parameter(span_length: float, parameter: float) -> float:
        """Midspan sag a·(cosh(L/2a) − 1) for a given catenary parameter.

        Uses the identity cosh(x) − 1 = 2·sinh²(x/2), which avoids cancellation
        when L/2a is small (shallow, high-tension spans).

        Args:
            span_length: Horizontal span length L
            parameter: Catenary parameter a

        Returns:
            Sag at midspan.
        """
        x = span_length / (2 * parameter)
        return 2 * parameter * sinh(x / 2) ** 2

    @staticmethod
    def solve(
        span_length: float,
        target_sag: float,
        max_iterations: int = CatenaryConfig.MAX_ITERATIONS,
    ) -> CatenarySolution:
        """Find the catenary parameter producing the target sag.

        Newton-Raphson on f(a) = a·(cosh(x) − 1) − s with x = L/(2a) and
        f'(a) = cosh(x) − 1 − x·sinh(x). Stops when |Δa| < tolerance or the
        iteration cap is reached.

        Args:
            span_length: Horizontal span length L (clamped to a small epsilon)
            target_sag: Desired midspan sag s (clamped to a small positive minimum)
            max_iterations: Iteration cap

        Returns:
            CatenarySolution with the parameter and convergence information.
        """
        length = max(span_length, CatenaryConfig.SPAN_EPSILON)
        sag = max(target_sag, CatenaryConfig.MIN_TARGET_SAG)

        # cosh(L/2a) overflows a float once L/2a exceeds ~710
        a_floor = length / (2 * CatenaryConfig.MAX_HALF_SPAN_RATIO)

        a = max(length**2 / (8 * sag), a_floor)
        for iteration in range(1, max_iterations + 1):
            x = length / (2 * a)
            f = CatenarySolver.sag_for_parameter(span_length=length, parameter=a) - sag
            df = 2 * sinh(x / 2) ** 2 - x * sinh(x)
            if df == 0.0:
                # Derivative underflowed: the current estimate is exact to machine precision
                return CatenarySolution(parameter=a, iterations=iteration, converged=True)

            next_a = max(a - f / df, a_floor)
            delta = next_a - a
            a = next_a

            if abs(delta) < CatenaryConfig.TOLERANCE:
                return CatenarySolution(parameter=a, iterations=iteration, converged=True)

        logger.debug(
            f"Catenary solve hit iteration cap ({max_iterations}) for L={length:.3f}, s={sag:.4f}; "
            f"returning last estimate a={a:.4f}"
        )
        return CatenarySolution(parameter=a, iterations=max_iterations, converged=False)


def solve_catenary_parameter(
    span_length: float,
    target_sag: float,
    max_iterations: int = CatenaryConfig.MAX_ITERATIONS,
) -> float:
    """Return the catenary parameter a with a·(cosh(L/2a) − 1) ≈ target_sag."""
    return CatenarySolver.solve(
        span_length=span_length,
        target_sag=target_sag,
        max_iterations=max_iterations,
    ).parameter
