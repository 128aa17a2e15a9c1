"""Tests for ground clearance evaluation.

Tests: ClearanceEvaluator, check_clearances, Span conductor groups
Focus: Minimum over all samples, threshold semantics, conductor attribution

Note: Fixtures are defined in conftest.py (pole pairs).
"""

from math import inf

import pytest
from hypothesis import given, settings, strategies as st

from gridscaper.core.clearance_evaluator import ClearanceEvaluator, ConductorGroup, check_clearances
from gridscaper.core.elevation_model import ElevationModel, PoleProfileSource
from gridscaper.model.curve_point import CurvePoint
from gridscaper.model.pole import Pole
from gridscaper.model.span import Span


def _flat(x: float, z: float) -> float:
    return 0.0


class TestClearanceEvaluator:
    """ClearanceEvaluator - minimum conductor-to-ground gap per span."""

    def test_level_span_over_flat_ground(self, level_pole_pair: tuple[Pole, Pole]) -> None:
        """20-tall poles with 1.5 sag clear flat ground by 18.5 at midspan."""
        span = Span(pole_a=level_pole_pair[0], pole_b=level_pole_pair[1], key="0-1", lateral_offsets=(0.0,))
        [report] = check_clearances(groups=[span.conductor_curves()], height_fn=_flat, threshold=15.0)

        assert report.key == "0-1"
        assert report.status == "ok"
        assert report.min_clearance == pytest.approx(18.5, abs=1e-2)
        assert report.sample_index == 16, "Symmetric span should be tightest at midspan"

    def test_violation_below_threshold(self, level_pole_pair: tuple[Pole, Pole]) -> None:
        """The same span violates a threshold above its minimum clearance."""
        span = Span(pole_a=level_pole_pair[0], pole_b=level_pole_pair[1], key="0-1")
        [report] = check_clearances(groups=[span.conductor_curves()], height_fn=_flat, threshold=19.0)
        assert report.is_violation

    def test_minimum_not_at_apex_on_slope(self, uphill_pole_pair: tuple[Pole, Pole]) -> None:
        """On rising ground with a short downhill pole, the tightest point is at that pole."""
        pole_a, pole_b = uphill_pole_pair
        span = Span(pole_a=pole_a, pole_b=pole_b, key="0-1", lateral_offsets=(0.0,))
        [report] = check_clearances(
            groups=[span.conductor_curves(samples=32)],
            height_fn=lambda x, z: 0.4 * x,
            threshold=15.0,
        )

        assert report.sample_index == 32, f"Expected minimum at pole B, got sample {report.sample_index}"
        assert report.min_clearance == pytest.approx(10.0)
        assert report.is_violation

    def test_reports_conductor_closest_to_ground(self, level_pole_pair: tuple[Pole, Pole]) -> None:
        """Ground rising toward +z makes the +1.2 conductor the tightest."""
        span = Span(pole_a=level_pole_pair[0], pole_b=level_pole_pair[1], key="0-1")
        [report] = check_clearances(groups=[span.conductor_curves()], height_fn=lambda x, z: z)

        assert report.conductor_index == 2
        assert report.location is not None and report.location.z == pytest.approx(1.2)

    def test_one_report_per_group_in_order(self, level_pole_pair: tuple[Pole, Pole]) -> None:
        """Reports come back one per group in input order."""
        span = Span(pole_a=level_pole_pair[0], pole_b=level_pole_pair[1], key="0-1")
        groups = [span.conductor_curves(), ConductorGroup(key="1-2", curves=((CurvePoint(x=0, y=30, z=0),),))]
        reports = check_clearances(groups=groups, height_fn=_flat)
        assert [r.key for r in reports] == ["0-1", "1-2"]

    def test_empty_group_is_ok(self) -> None:
        """A group without points is reported clear with infinite clearance."""
        [report] = check_clearances(groups=[ConductorGroup(key="empty", curves=())], height_fn=_flat)
        assert report.status == "ok"
        assert report.min_clearance == inf
        assert report.location is None

    def test_threshold_equal_to_minimum_is_ok(self) -> None:
        """Violation requires clearance strictly below the threshold."""
        group = ConductorGroup(key="g", curves=((CurvePoint(x=0, y=15, z=0),),))
        [report] = ClearanceEvaluator.evaluate(groups=[group], height_fn=_flat, threshold=15.0)
        assert report.status == "ok"

    def test_accepts_elevation_model(self, level_pole_pair: tuple[Pole, Pole]) -> None:
        """An ElevationModel can be passed directly as the height function."""
        model = ElevationModel(PoleProfileSource(knots=((0.0, 2.0), (10.0, 2.0))))
        span = Span(pole_a=level_pole_pair[0], pole_b=level_pole_pair[1], key="0-1", lateral_offsets=(0.0,))
        [report] = check_clearances(groups=[span.conductor_curves()], height_fn=model)
        assert report.ground_elevation == pytest.approx(2.0)
        assert report.min_clearance == pytest.approx(16.5, abs=1e-2)

    def test_rejects_nan_threshold(self) -> None:
        """NaN thresholds are a programming error."""
        with pytest.raises(ValueError, match="NaN"):
            check_clearances(groups=[], height_fn=_flat, threshold=float("nan"))

    @given(
        low=st.floats(min_value=0.0, max_value=40.0, allow_nan=False),
        delta=st.floats(min_value=0.0, max_value=40.0, allow_nan=False),
        ground=st.floats(min_value=-5.0, max_value=15.0, allow_nan=False),
    )
    @settings(max_examples=30)
    def test_violation_monotone_in_threshold(self, low: float, delta: float, ground: float) -> None:
        """A violation at threshold T remains a violation at every larger threshold."""
        pole_a = Pole(x=0.0, z=0.0, height=20.0)
        pole_b = Pole(x=40.0, z=0.0, height=20.0)
        group = Span(pole_a=pole_a, pole_b=pole_b, key="0-1").conductor_curves(samples=8)

        [at_low] = check_clearances(groups=[group], height_fn=lambda x, z: ground, threshold=low)
        [at_high] = check_clearances(groups=[group], height_fn=lambda x, z: ground, threshold=low + delta)

        if at_low.is_violation:
            assert at_high.is_violation
        assert at_low.min_clearance == at_high.min_clearance
