"""Integration tests for importing survey data into a scene.

GIS workflow: CSV -> records -> scene coordinates -> surface -> poles -> clearances.
Profile workflow: CSV -> profile -> extruded terrain -> poles -> clearances.
"""

import pytest

from gridscaper.core.elevation_model import ElevationModel, GISSource, PoleProfileSource, select_source
from gridscaper.importers import (
    convert_to_scene_coordinates,
    create_terrain_from_profile,
    parse_elevation_profile,
    parse_gis_data,
    validate_elevation_profile,
    validate_gis_data,
)
from gridscaper.model.scene import Scene


class TestGISImportWorkflow:
    """Tests for the GIS survey import workflow."""

    def test_sample_gis_to_clearance_reports(self, gis_scene: Scene) -> None:
        """Eight imported poles form seven spans, each with a report."""
        reports = gis_scene.check_clearances()

        assert len(gis_scene.poles) == 8
        assert [r.key for r in reports] == [f"{i}-{i + 1}" for i in range(7)]

    def test_center_conductor_meets_ground_at_pole_base(self, gis_scene: Scene) -> None:
        """The survey surface passes through each pole base, so clearance is at most the pole height."""
        reports = gis_scene.check_clearances()
        spans = gis_scene.spans()

        for span, report in zip(spans, reports):
            limit = min(span.pole_a.height, span.pole_b.height)
            assert report.min_clearance <= limit + 1e-9, f"{span.key}: {report.min_clearance} > {limit}"

    def test_surface_matches_survey_points(self, sample_gis_csv: str) -> None:
        """The GIS surface returns each survey elevation at its scene position."""
        converted = convert_to_scene_coordinates(parse_gis_data(sample_gis_csv).records)
        model = ElevationModel(GISSource.from_records(converted.records))

        for record in converted.records:
            assert model.height(record.x, record.z) == record.elevation

    def test_gis_overrides_profile(self, sample_gis_csv: str) -> None:
        """With both configured, the GIS surface is the active source."""
        converted = convert_to_scene_coordinates(parse_gis_data(sample_gis_csv).records)
        gis = GISSource.from_records(converted.records)
        profile = PoleProfileSource(knots=((0.0, 0.0), (10.0, 5.0)))

        assert ElevationModel.from_sources([profile, gis]).kind == "gis"
        assert select_source([profile]) is profile

    def test_validation_precedes_import(self, sample_gis_csv: str) -> None:
        """Validation summary agrees with the parsed data."""
        validation = validate_gis_data(sample_gis_csv)
        parsed = parse_gis_data(sample_gis_csv)

        assert validation.success
        assert validation.summary["total_poles"] == parsed.valid_count


class TestProfileImportWorkflow:
    """Tests for the elevation profile import workflow."""

    def test_profile_terrain_scene(self, sample_profile_csv: str) -> None:
        """Poles placed on an imported profile sit on the normalized ground."""
        terrain = create_terrain_from_profile(parse_elevation_profile(sample_profile_csv))
        scene = Scene(terrain=terrain.elevation_model.source)

        left = scene.place_pole(x=-100.0, z=0.0, height=30.0)
        right = scene.place_pole(x=100.0, z=0.0, height=30.0)

        assert left.elevation == terrain.profile_points[0].y
        assert right.elevation == pytest.approx(terrain.profile_points[-1].y)
        [report] = scene.check_clearances()
        assert report.key == "0-1"
        assert report.min_clearance <= 30.0 + 1e-9, "Clearance at each pole base equals the pole height"

    def test_profile_scene_survives_reload(self, sample_profile_csv: str) -> None:
        """The imported profile terrain rebuilds identically after a save/load."""
        terrain = create_terrain_from_profile(parse_elevation_profile(sample_profile_csv))
        scene = Scene(terrain=terrain.elevation_model.source)
        scene.place_pole(x=-80.0, z=0.0, height=25.0)
        scene.place_pole(x=60.0, z=0.0, height=25.0)

        restored = Scene.from_json(scene.to_json())
        assert restored.check_clearances() == scene.check_clearances()

    def test_sample_profile_validates(self, sample_profile_csv: str) -> None:
        """The bundled sample has 24 points and coordinates."""
        validation = validate_elevation_profile(sample_profile_csv)
        assert validation.success
        assert validation.summary["point_count"] == 24
        assert validation.summary["has_coordinates"] is True
