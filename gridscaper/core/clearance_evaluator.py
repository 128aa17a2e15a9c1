"""Ground clearance evaluation for conductor groups.

A conductor group is every parallel conductor hung across one span. For each
group the evaluator scans every sampled point of every curve, measures the
vertical gap to the ground directly below (curve y − ground height at x, z),
and reports the smallest gap together with where it occurs.

A group is a violation iff its minimum clearance is strictly below the
threshold. The minimum is taken over all samples, not just the midspan:
on sloped ground the tightest point is often away from the apex.

Evaluation is a pure function of its inputs; there is no caching between
calls.
"""

import logging
from dataclasses import dataclass
from math import inf, isnan
from typing import Callable, Iterable, Optional, Sequence

from gridscaper.constants import ClearanceConfig
from gridscaper.model.curve_point import CurvePoint

logger = logging.getLogger(__name__)

HeightFunction = Callable[[float, float], float]


@dataclass(frozen=True)
class ConductorGroup:
    """All conductor curves belonging to one span.

    Attributes:
        key: Identifier of the span (e.g. "0-1" for poles 0 and 1)
        curves: One sampled curve per conductor
    """

    key: str
    curves: tuple[tuple[CurvePoint, ...], ...]

    @classmethod
    def from_curves(cls, key: str, curves: Iterable[Sequence[CurvePoint]]) -> "ConductorGroup":
        return cls(key=key, curves=tuple(tuple(curve) for curve in curves))

    @property
    def point_count(self) -> int:
        return sum(len(curve) for curve in self.curves)


@dataclass(frozen=True)
class ClearanceReport:
    """Clearance result for one conductor group.

    Attributes:
        key: Span identifier copied from the group
        status: "ok" or "violation"
        min_clearance: Smallest vertical gap to ground (inf for an empty group)
        location: Curve point where the minimum occurs (None for an empty group)
        ground_elevation: Ground height below that point
        conductor_index: Index of the curve holding the minimum within the group
        sample_index: Index of the sample within that curve
        threshold: Threshold the group was judged against
    """

    key: str
    status: str
    min_clearance: float
    location: Optional[CurvePoint]
    ground_elevation: Optional[float]
    conductor_index: Optional[int]
    sample_index: Optional[int]
    threshold: float

    @property
    def is_violation(self) -> bool:
        return self.status == "violation"

    def __repr__(self) -> str:
        return f"ClearanceReport({self.key}: {self.status}, min={self.min_clearance:.2f}, threshold={self.threshold:g})"


class ClearanceEvaluator:
    """Checks conductor groups against a minimum ground clearance."""

    @staticmethod
    def evaluate_group(group: ConductorGroup, height_fn: HeightFunction, threshold: float) -> ClearanceReport:
        """Find the lowest clearance in one group and classify it.

        Args:
            group: Conductor curves of one span
            height_fn: Ground elevation at (x, z)
            threshold: Minimum allowed clearance

        Returns:
            ClearanceReport for the group.
        """
        min_clearance = inf
        best: Optional[tuple[CurvePoint, float, int, int]] = None

        for conductor_index, curve in enumerate(group.curves):
            for sample_index, point in enumerate(curve):
                ground = height_fn(point.x, point.z)
                clearance = point.y - ground
                if clearance < min_clearance:
                    min_clearance = clearance
                    best = (point, ground, conductor_index, sample_index)

        if best is None:
            logger.warning(f"Conductor group {group.key} has no sample points; reporting it as clear")
            return ClearanceReport(
                key=group.key,
                status="ok",
                min_clearance=inf,
                location=None,
                ground_elevation=None,
                conductor_index=None,
                sample_index=None,
                threshold=threshold,
            )

        location, ground, conductor_index, sample_index = best
        status = "violation" if min_clearance < threshold else "ok"
        if status == "violation":
            logger.debug(
                f"Clearance violation on {group.key}: {min_clearance:.2f} < {threshold:g} "
                f"at ({location.x:.1f}, {location.z:.1f})"
            )

        return ClearanceReport(
            key=group.key,
            status=status,
            min_clearance=min_clearance,
            location=location,
            ground_elevation=ground,
            conductor_index=conductor_index,
            sample_index=sample_index,
            threshold=threshold,
        )

    @staticmethod
    def evaluate(
        groups: Iterable[ConductorGroup],
        height_fn: HeightFunction,
        threshold: float = ClearanceConfig.DEFAULT_THRESHOLD,
    ) -> list[ClearanceReport]:
        """Evaluate every group, one report per group in input order."""
        if isnan(threshold):
            raise ValueError("Clearance threshold must not be NaN")
        return [
            ClearanceEvaluator.evaluate_group(group=group, height_fn=height_fn, threshold=threshold)
            for group in groups
        ]


def check_clearances(
    groups: Iterable[ConductorGroup],
    height_fn: HeightFunction,
    threshold: float = ClearanceConfig.DEFAULT_THRESHOLD,
) -> list[ClearanceReport]:
    """Return a clearance report per conductor group.

    height_fn may be a plain callable or an ElevationModel.
    """
    return ClearanceEvaluator.evaluate(groups=groups, height_fn=height_fn, threshold=threshold)
