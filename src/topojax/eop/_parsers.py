"""Reader for IERS ``finals`` files (Bulletin A/B, IAU 2000 series).

Each record is a fixed-width line of 187 characters; see the IERS
``readme.finals2000A``.  Only two fields are read:

=========  ==========  ==========================
Columns    Field       Format
=========  ==========  ==========================
8-15       MJD (UTC)   F8.2
59-68      UT1-UTC     F10.7, seconds
=========  ==========  ==========================

Trailing records that carry a date but no UT1-UTC value are skipped.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

RECORD_LENGTH = 187

_MJD = slice(6, 15)
_UT1_UTC = slice(58, 68)


def parse_standard_line(line: str) -> tuple[float, float] | None:
    """Read ``(mjd, ut1_utc)`` from one record, or ``None`` if it has none.

    Records with trailing blanks stripped are accepted; lines longer than a
    record are not.
    """
    if len(line) > RECORD_LENGTH:
        return None
    try:
        return float(line[_MJD]), float(line[_UT1_UTC])
    except ValueError:
        return None


def parse_standard_file(filepath: str | Path) -> tuple[np.ndarray, np.ndarray]:
    """Read all UT1-UTC values from a finals file.

    Args:
        filepath: Path of the file.

    Returns:
        ``(mjd, ut1_utc)`` as float64 arrays.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no UT1-UTC values, or its dates are
            not strictly increasing.
    """
    with open(filepath, encoding="ascii", errors="replace") as f:
        records = [r for r in map(parse_standard_line, f.read().splitlines()) if r is not None]

    if not records:
        raise ValueError(f"No valid EOP data found in {filepath}")

    mjd, ut1_utc = np.array(records, dtype=np.float64).T
    if np.any(np.diff(mjd) <= 0.0):
        raise ValueError(f"EOP dates in {filepath} are not strictly increasing")
    return mjd, ut1_utc
