"""Shared pytest fixtures for gridscaper workflow tests.

Workflows run the engine end to end: import survey CSVs, build the terrain,
place poles, recompute curves and clearances, save and reload the scene.
Minimal fixtures: each test builds what it needs from these inputs.
"""

import pytest

from gridscaper.core.elevation_model import GISSource, PoleProfileSource
from gridscaper.importers import (
    convert_to_scene_coordinates,
    generate_sample_elevation_profile,
    generate_sample_gis_data,
    parse_gis_data,
)
from gridscaper.model.pole import Pole
from gridscaper.model.scene import Scene


# =============================================================================
# SCENE FIXTURES
# =============================================================================


@pytest.fixture
def ridge_scene() -> Scene:
    """Three poles along z over a profile with a ridge at z = 50.

    Ground: 0 at z=0, 18 at z=50, 0 at z=100.
    Poles are 20 tall at z = 0, 50 and 100 with matching base elevations,
    so conductors clear the ridge by at most 20 and the span midpoints sit
    over falling ground.
    """
    terrain = PoleProfileSource(knots=((0.0, 0.0), (50.0, 18.0), (100.0, 0.0)))
    poles = [
        Pole(x=0.0, z=0.0, height=20.0, elevation=0.0),
        Pole(x=0.0, z=50.0, height=20.0, elevation=18.0),
        Pole(x=0.0, z=100.0, height=20.0, elevation=0.0),
    ]
    return Scene(poles=poles, terrain=terrain)


@pytest.fixture
def gis_scene() -> Scene:
    """The bundled GIS sample imported onto its own survey surface."""
    converted = convert_to_scene_coordinates(parse_gis_data(generate_sample_gis_data()).records)
    return Scene(
        poles=[record.to_pole() for record in converted.records],
        terrain=GISSource.from_records(converted.records),
    )


# =============================================================================
# CSV FIXTURES
# =============================================================================


@pytest.fixture
def sample_gis_csv() -> str:
    return generate_sample_gis_data()


@pytest.fixture
def sample_profile_csv() -> str:
    return generate_sample_elevation_profile()
