"""Permissive CSV splitting shared by the survey importers.

GIS tools export loosely formatted CSV: trailing blank lines, CRLF line
endings, quoted identifiers, units glued onto numbers ("1050ft"). These
helpers accept all of that. Quoted cells may contain commas.
"""

import csv
import re
from typing import Optional

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def split_lines(text: str) -> list[tuple[int, str]]:
    """Split text into (line_number, line) pairs, dropping blank lines.

    Line numbers are 1-based and count blank lines, so they match what a
    user sees in an editor (after surrounding whitespace is trimmed).
    """
    return [
        (number, line.strip())
        for number, line in enumerate(text.strip().splitlines(), start=1)
        if line.strip()
    ]


def split_fields(line: str) -> list[str]:
    """Split one CSV line, honoring double quotes, then trim whitespace and stray quotes.

    Example:
        split_fields('"Pole 1, North",40.0')  # ["Pole 1, North", "40.0"]
    """
    return [field.strip().strip("'\"").strip() for field in next(csv.reader([line], skipinitialspace=True))]


def parse_number(text: str) -> Optional[float]:
    """Parse the leading number of a cell, or None if it has none.

    Example:
        parse_number("1050")    # 1050.0
        parse_number("1050ft")  # 1050.0
        parse_number("n/a")     # None
    """
    match = _LEADING_NUMBER.match(text.strip())
    if match is None:
        return None
    return float(match.group(0))


def normalize_headers(line: str) -> list[str]:
    """Header cells lowercased for keyword matching."""
    return [header.lower() for header in split_fields(line)]


def cell(values: list[str], index: Optional[int]) -> Optional[str]:
    """Value at a column index, or None if the column is absent or the row is short."""
    if index is None or index >= len(values):
        return None
    return values[index]
