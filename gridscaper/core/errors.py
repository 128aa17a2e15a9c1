"""Error hierarchy for the geometry engine.

Only structurally invalid input raises. Thin or suspicious data is reported
through DataWarning values (see gridscaper.model.warning) and never blocks import.
"""


class GridScaperError(Exception):
    """Base error for GridScaper operations."""


class InvalidInputData(GridScaperError, ValueError):
    """Imported data is structurally unusable.

    Raised for an empty file, a missing required column, zero valid rows after
    skipping malformed ones, or too few points to build a terrain surface.
    """
