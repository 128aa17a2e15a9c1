"""Write the bundled sample survey files and run a clearance check on them.

Developer utility: produces sample_gis.csv and sample_profile.csv in the
output directory, imports the GIS sample into a scene, and prints the
clearance report for every span.

Run: python scripts/write_sample_data.py [output_dir]
"""

import logging
import sys
from pathlib import Path

from gridscaper.core.elevation_model import GISSource
from gridscaper.importers import (
    convert_to_scene_coordinates,
    generate_sample_elevation_profile,
    generate_sample_gis_data,
    parse_gis_data,
    validate_elevation_profile,
)
from gridscaper.model.scene import Scene

DEFAULT_OUTPUT_DIR = Path.cwd() / "samples"


def write_sample_data(output_dir: Path) -> None:
    """Write both sample CSVs and print the GIS sample's clearance report."""
    output_dir.mkdir(parents=True, exist_ok=True)

    gis_csv = generate_sample_gis_data()
    profile_csv = generate_sample_elevation_profile()
    (output_dir / "sample_gis.csv").write_text(gis_csv, encoding="utf-8")
    (output_dir / "sample_profile.csv").write_text(profile_csv, encoding="utf-8")
    print(f"Wrote sample CSVs to {output_dir}")

    validation = validate_elevation_profile(profile_csv)
    print(f"Profile sample: {validation.summary}")

    converted = convert_to_scene_coordinates(parse_gis_data(gis_csv).records)
    print(
        f"GIS sample: {len(converted.records)} poles, footprint "
        f"{converted.metadata.scene_width:.1f} x {converted.metadata.scene_depth:.1f}"
    )

    scene = Scene(
        poles=[record.to_pole() for record in converted.records],
        terrain=GISSource.from_records(converted.records),
    )
    for report in scene.check_clearances():
        print(report)

    (output_dir / "sample_scene.json").write_text(scene.to_json(), encoding="utf-8")
    print(f"Saved scene to {output_dir / 'sample_scene.json'}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    write_sample_data(Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_OUTPUT_DIR)
