"""Conductor curve construction between two poles.

Samples the hanging shape of one conductor over a span:
- Attachment heights come from the poles (base elevation + pole height)
- Base sag = max(MIN_SAG, span · BASE_SAG_FACTOR) / tension
- The catenary parameter for that sag is solved numerically
- Each sample dips below the straight chord by a·(cosh(d/2a) − cosh(u/a))

Endpoints land exactly on the two attachment points. The bowl is symmetric
when both attachments are at the same height and biased toward the lower
attachment otherwise. Output is deterministic for identical inputs.

The legacy sine approximation (chord − sag·sin(πt)) remains available as
the "sine" sag model.
"""

from dataclasses import dataclass
from math import hypot, pi, sin, sinh
from typing import TYPE_CHECKING

from gridscaper.constants import CatenaryConfig, ConductorConfig
from gridscaper.core.catenary_solver import CatenarySolver
from gridscaper.model.curve_point import CurvePoint

if TYPE_CHECKING:
    from gridscaper.model.pole import Pole


@dataclass(frozen=True)
class CurveOptions:
    """Per-conductor curve settings.

    Attributes:
        tension: Dimensionless tension factor (higher = less sag), must be > 0.
            Sag shrinks strictly with tension up to
            max(MIN_SAG, L · BASE_SAG_FACTOR) / MIN_TARGET_SAG (500 · L for spans
            of 2 or more); beyond that the solver holds sag at MIN_TARGET_SAG
        samples: Number of intervals; the curve has samples + 1 points
        lateral_offset: Perpendicular offset from the pole centerline (left is positive)
        terrain_offset_z: Global terrain frame offset added to the depth axis
        sag_model: "catenary" (default) or legacy "sine"
    """

    tension: float = ConductorConfig.DEFAULT_TENSION
    samples: int = ConductorConfig.DEFAULT_SAMPLES
    lateral_offset: float = 0.0
    terrain_offset_z: float = 0.0
    sag_model: str = "catenary"

    def __post_init__(self) -> None:
        if not self.tension > 0:
            raise ValueError(f"tension must be positive, got {self.tension}")
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")
        if self.sag_model not in ConductorConfig.SAG_MODELS:
            raise ValueError(f"Invalid sag_model '{self.sag_model}'. Must be one of: {ConductorConfig.SAG_MODELS}")


def _lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation that returns start at t=0 and end at t=1 exactly."""
    return (1 - t) * start + t * end


class ConductorCurveBuilder:
    """Builds sampled 3-D conductor curves for spans between poles."""

    @staticmethod
    def base_sag(span_length: float, tension: float) -> float:
        """Target midspan sag for a span at the given tension factor."""
        return max(ConductorConfig.MIN_SAG, span_length * ConductorConfig.BASE_SAG_FACTOR) / tension

    @staticmethod
    def catenary_dip(u: float, half_span: float, parameter: float) -> float:
        """Depth of the catenary below its chord at local coordinate u.

        Evaluates a·(cosh(half_span/a) − cosh(u/a)) through the product form
        2a·sinh((A+B)/2)·sinh((A−B)/2), which is exactly zero at u = ±half_span.

        Args:
            u: Horizontal coordinate measured from midspan
            half_span: Half of the horizontal span length
            parameter: Catenary parameter a

        Returns:
            Dip below the chord (non-negative within the span).
        """
        A = half_span / parameter
        B = u / parameter
        return 2 * parameter * sinh((A + B) / 2) * sinh((A - B) / 2)

    @staticmethod
    def build(pole_a: "Pole", pole_b: "Pole", options: CurveOptions = CurveOptions()) -> list[CurvePoint]:
        """Sample one conductor curve between two poles.

        Args:
            pole_a: Start pole
            pole_b: End pole
            options: Tension, sampling and offset settings

        Returns:
            Ordered list of samples + 1 CurvePoints from pole A to pole B.
        """
        h_a = pole_a.attachment_height
        h_b = pole_b.attachment_height

        dx = pole_b.x - pole_a.x
        dz = pole_b.z - pole_a.z
        span = hypot(dx, dz)
        degenerate = span < CatenaryConfig.SPAN_EPSILON

        # Unit perpendicular to the span direction (rotated 90° to the left)
        if degenerate:
            perp_x, perp_z = 0.0, 0.0
        else:
            perp_x, perp_z = -dz / span, dx / span

        start_x = pole_a.x + perp_x * options.lateral_offset
        start_z = pole_a.z + perp_z * options.lateral_offset
        end_x = pole_b.x + perp_x * options.lateral_offset
        end_z = pole_b.z + perp_z * options.lateral_offset

        d = max(span, CatenaryConfig.SPAN_EPSILON)
        sag = ConductorCurveBuilder.base_sag(span_length=d, tension=options.tension)
        parameter = None
        if options.sag_model == "catenary" and not degenerate:
            parameter = CatenarySolver.solve(span_length=d, target_sag=sag).parameter

        n = options.samples
        points = []
        for i in range(n + 1):
            t = i / n

            if degenerate:
                # Coincident poles: no span to hang across
                dip = 0.0
            elif parameter is not None:
                u = (t - 0.5) * d
                dip = ConductorCurveBuilder.catenary_dip(u=u, half_span=d / 2, parameter=parameter)
            else:
                # sin(πt) == sin(π(1 − t)); folding keeps both ends exactly zero
                dip = sag * sin(pi * min(t, 1 - t))

            points.append(
                CurvePoint(
                    x=_lerp(start_x, end_x, t),
                    y=_lerp(h_a, h_b, t) - dip,
                    z=_lerp(start_z, end_z, t) + options.terrain_offset_z,
                )
            )

        return points


def get_conductor_curve(pole_a: "Pole", pole_b: "Pole", options: CurveOptions = CurveOptions()) -> list[CurvePoint]:
    """Return the sampled conductor curve between two poles."""
    return ConductorCurveBuilder.build(pole_a=pole_a, pole_b=pole_b, options=options)
