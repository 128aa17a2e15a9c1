"""GridScaper - Conductor sag and ground clearance on real terrain.

Geometry engine for laying out overhead power lines:
- Catenary sag between poles from a dimensionless tension factor
- Parallel conductors per span on a standard crossarm
- Ground clearance checks against flat, profiled or surveyed terrain
- Import of GIS pole surveys and ground elevation profiles from CSV

Modules:
    core: Geometry engine (catenary solver, curve builder, clearance, elevation model)
    model: Data structures (Pole, CurvePoint, Span, Scene, GIS records, warnings)
    importers: CSV parsing for GIS points and elevation profiles

Example:
    from gridscaper.model import Pole
    from gridscaper.core import CurveOptions, get_conductor_curve
    curve = get_conductor_curve(Pole(x=0, z=0, height=10), Pole(x=30, z=0, height=12))
"""
