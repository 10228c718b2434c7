"""
Converts between the display representation (0 - 100, written by the radar
widget into the synchronized record) and the engine representation (0 - 1).
"""

import logging
import math
from typing import Any, Dict, Mapping, Optional

from mixbar.recipe.recipe_types import DISPLAY_AXES, DisplayVector, SabitVector

logger = logging.getLogger(__name__)

DISPLAY_SCALE = 100.0


def to_engine_vector(display: DisplayVector) -> SabitVector:
    """Divides each component by 100. No clamping; the engine clamps."""
    return SabitVector(*(value / DISPLAY_SCALE for value in display.as_tuple()))


def _component(record: Mapping[str, Any], axis: str) -> float:
    value = record.get(axis)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Record field {axis}={value!r} is not numeric, using 0")
        return 0.0


def from_record(record: Optional[Mapping[str, Any]]) -> DisplayVector:
    """
    Builds a display vector from a synchronized record.
    Missing, null or non-numeric fields become 0; extra fields (timestamp) are ignored.
    """
    if not record:
        return DisplayVector()
    return DisplayVector(*(_component(record, axis) for axis in DISPLAY_AXES))


def record_to_engine_vector(record: Optional[Mapping[str, Any]]) -> SabitVector:
    return to_engine_vector(from_record(record))


def balance(display: DisplayVector) -> Dict[str, float]:
    """Share of each axis in the total, in percent. Even split when nothing is set."""
    # Negative and non-finite components (e.g. Infinity in a JSON body) count as 0
    values = [v if math.isfinite(v) and v > 0 else 0.0 for v in display.as_tuple()]
    total = sum(values)
    if total == 0:
        return {axis: 100.0 / len(DISPLAY_AXES) for axis in DISPLAY_AXES}
    return {axis: round(v / total * 100.0, 1) for axis, v in zip(DISPLAY_AXES, values)}
