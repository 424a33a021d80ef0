"""Numeric value normalization for change descriptions.

Memory sizes are normalized to MB using decimal scaling (1 GB = 1000 MB),
matching how the control plane reports plan sizes.
"""

import math

from changeline.core.errors import ValueExtractionError

UNIT_SCALE = {
    "gb": 1000,
    "mb": 1,
}


def normalize(magnitude: str, unit: str) -> int:
    """Convert a magnitude and unit to an integer number of MB.

    Unrecognized units leave the value unscaled. Fractions are truncated.

    Args:
        magnitude: Decimal number text (e.g. "2.5")
        unit: Unit text, case-insensitive (e.g. "GB")

    Returns:
        Size in MB

    Raises:
        ValueExtractionError: If magnitude is not a finite number
    """
    try:
        base = float(magnitude)
    except ValueError as e:
        raise ValueExtractionError(f"Invalid size magnitude: {magnitude!r}", text=magnitude) from e

    scaled = base * UNIT_SCALE.get(unit.lower(), 1)
    if not math.isfinite(scaled):
        raise ValueExtractionError(f"Invalid size magnitude: {magnitude!r}", text=magnitude)

    return int(scaled)


def parse_ops(value: str) -> int:
    """Parse a throughput value in ops/sec.

    Raises:
        ValueExtractionError: If value is not an integer
    """
    try:
        return int(value)
    except ValueError as e:
        raise ValueExtractionError(f"Invalid ops/sec value: {value!r}", text=value) from e
