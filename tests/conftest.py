"""Shared pytest fixtures for gridscaper tests.

Provides reusable poles, terrain sources and CSV snippets for all tests.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    x and z span the ground plane (z is the scene depth axis), y is elevation.
    Most spans run along +x at z = 0 so the left-hand perpendicular of the
    span is +z: a positive lateral offset moves a conductor toward +z.
"""

import pytest

from gridscaper.core.elevation_model import PoleProfileSource
from gridscaper.model.pole import Pole


# =============================================================================
# POLE FIXTURES
# =============================================================================


@pytest.fixture
def pole_pair_30_span() -> tuple[Pole, Pole]:
    """Two poles 30 apart on flat ground, attachments at 10 and 12.

    Base sag = max(0.1, 30 * 0.05) / 1 = 1.5, so the midspan point sits
    at (10 + 12) / 2 - 1.5 = 9.5.
    """
    return Pole(x=0.0, z=0.0, height=10.0), Pole(x=30.0, z=0.0, height=12.0)


@pytest.fixture
def level_pole_pair() -> tuple[Pole, Pole]:
    """Two 20-tall poles 30 apart at equal base elevation (symmetric bowl)."""
    return Pole(x=0.0, z=0.0, height=20.0), Pole(x=30.0, z=0.0, height=20.0)


@pytest.fixture
def uphill_pole_pair() -> tuple[Pole, Pole]:
    """Poles on ground rising 0.4 per unit of x (ground = 0.4 * x).

    Pole A: base 0, 20 tall -> attachment 20.
    Pole B: base 12 at x = 30, 10 tall -> attachment 22.
    Clearance falls from 20 at A to 10 at B, so the tightest point is at
    pole B, not at midspan.
    """
    return Pole(x=0.0, z=0.0, height=20.0, elevation=0.0), Pole(x=30.0, z=0.0, height=10.0, elevation=12.0)


# =============================================================================
# TERRAIN FIXTURES
# =============================================================================


@pytest.fixture
def ramp_profile_source() -> PoleProfileSource:
    """Profile rising linearly from 0 at z=0 to 20 at z=100."""
    return PoleProfileSource(knots=((0.0, 0.0), (100.0, 20.0)))


@pytest.fixture
def two_point_records() -> list:
    """Two scene-space survey points 10 apart along x with elevations 10 and 20."""

    class _Point:
        def __init__(self, x: float, z: float, elevation: float) -> None:
            self.x, self.z, self.elevation = x, z, elevation

    return [_Point(x=0.0, z=0.0, elevation=10.0), _Point(x=10.0, z=0.0, elevation=20.0)]


# =============================================================================
# CSV FIXTURES
# =============================================================================


@pytest.fixture
def gis_csv_two_poles() -> str:
    """Two poles at the same latitude, 0.001° apart in longitude."""
    return "lat,lng,elevation,pole_height,pole_id\n40.0,-105.0,1600,12,A\n40.0,-105.001,1610,14,B\n"


@pytest.fixture
def profile_csv_five_points() -> str:
    """Five profile points over 100 units of distance with a 10-unit rise."""
    return (
        "Distance,Elevation\n"
        "0,100\n"
        "25,102\n"
        "50,105\n"
        "75,108\n"
        "100,110\n"
    )
