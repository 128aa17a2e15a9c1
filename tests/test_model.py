"""Tests for gridscaper data model classes.

Tests: CurvePoint, Pole, Span, GISRecord, DataWarning
Focus: Validation, derived properties, serialization shape
"""

import pytest

from gridscaper.model.curve_point import CurvePoint
from gridscaper.model.gis_record import GISRecord
from gridscaper.model.pole import Pole
from gridscaper.model.span import Span
from gridscaper.model.warning import (
    DataWarning,
    FewPointsWarning,
    MissingColumnWarning,
    SkippedRowWarning,
)


class TestCurvePoint:
    """CurvePoint - immutable sampled conductor point."""

    def test_rejects_nan_elevation(self) -> None:
        """Curve points never carry NaN elevations."""
        with pytest.raises(ValueError, match="NaN"):
            CurvePoint(x=0.0, y=float("nan"), z=0.0)

    def test_is_frozen(self) -> None:
        """Curve points cannot be mutated."""
        point = CurvePoint(x=1.0, y=2.0, z=3.0)
        with pytest.raises(AttributeError):
            point.y = 5.0  # type: ignore[misc]

    def test_xz(self) -> None:
        """xz returns the plan position."""
        assert CurvePoint(x=1.0, y=2.0, z=3.0).xz == (1.0, 3.0)


class TestPole:
    """Pole - support structure with derived attachment height."""

    def test_attachment_height(self) -> None:
        """Attachment height = base elevation + pole height."""
        assert Pole(x=0.0, z=0.0, height=12.0, elevation=3.5).attachment_height == 15.5

    def test_horizontal_distance(self) -> None:
        """Distance ignores elevation."""
        a = Pole(x=0.0, z=0.0, height=10.0, elevation=0.0)
        b = Pole(x=3.0, z=4.0, height=10.0, elevation=100.0)
        assert a.horizontal_distance_to(b) == 5.0

    @pytest.mark.parametrize("height", [0.0, -2.0])
    def test_rejects_non_positive_height(self, height: float) -> None:
        """Poles must have positive height."""
        with pytest.raises(ValueError, match="height"):
            Pole(x=0.0, z=0.0, height=height)

    def test_rejects_non_finite_position(self) -> None:
        """NaN positions are rejected."""
        with pytest.raises(ValueError, match="finite"):
            Pole(x=float("nan"), z=0.0, height=10.0)

    def test_dict_round_trip(self) -> None:
        """Persisted shape is {x, z, height, elevation} (+ id when set)."""
        pole = Pole(x=1.5, z=-2.0, height=10.0, elevation=7.25)
        assert pole.to_dict() == {"x": 1.5, "z": -2.0, "height": 10.0, "elevation": 7.25}
        assert Pole.from_dict(pole.to_dict()) == pole

        named = Pole(x=0.0, z=0.0, height=10.0, id="P1")
        assert Pole.from_dict(named.to_dict()).id == "P1"

    def test_from_dict_defaults_elevation(self) -> None:
        """Older records without elevation stand on ground level 0."""
        assert Pole.from_dict({"x": 1, "z": 2, "height": 10}).elevation == 0.0


class TestSpan:
    """Span - parallel conductors between two poles."""

    def test_one_curve_per_offset(self) -> None:
        """The default crossarm carries three conductors."""
        span = Span(pole_a=Pole(x=0.0, z=0.0, height=10.0), pole_b=Pole(x=30.0, z=0.0, height=10.0), key="0-1")
        group = span.conductor_curves(samples=8)

        assert group.key == "0-1"
        assert len(group.curves) == 3
        assert all(len(curve) == 9 for curve in group.curves)
        assert [curve[0].z for curve in group.curves] == pytest.approx([-1.2, 0.0, 1.2])
        assert span.length == 30.0

    def test_rejects_empty_offsets(self) -> None:
        """A span needs at least one conductor."""
        with pytest.raises(ValueError, match="offset"):
            Span(pole_a=Pole(x=0, z=0, height=10), pole_b=Pole(x=1, z=0, height=10), key="0-1", lateral_offsets=())


class TestGISRecord:
    """GISRecord - immutable geographic record."""

    def test_scene_position_returns_new_record(self) -> None:
        """Conversion does not mutate the parsed record."""
        record = GISRecord(id="P1", lat=1.0, lng=2.0, elevation=3.0, height=10.0)
        converted = record.with_scene_position(x=4.0, z=5.0, cumulative_distance=0.0)

        assert not record.is_converted
        assert converted.is_converted
        assert converted.to_dict()["x"] == 4.0
        assert "x" not in record.to_dict()


class TestDataWarning:
    """DataWarning - structured advisory messages."""

    def test_messages(self) -> None:
        """Every warning renders a readable message and str()."""
        warnings: list[DataWarning] = [
            SkippedRowWarning(line_number=4, reason="latitude 95.0 outside [-90, 90]"),
            MissingColumnWarning(column="elevation", default=0.0),
            FewPointsWarning(count=2, recommended=3),
        ]
        assert warnings[0].message == "Row 4 skipped: latitude 95.0 outside [-90, 90]"
        assert "elevation" in str(warnings[1])
        assert "2" in warnings[2].message
        assert all(w.warning_type == type(w).__name__ for w in warnings)

    def test_base_is_abstract(self) -> None:
        """The base class cannot be instantiated."""
        with pytest.raises(TypeError):
            DataWarning()  # type: ignore[abstract]
