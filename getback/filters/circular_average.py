"""
Averaging of angles on a circular range (0-360 degrees).
"""

from .low_pass import filter_value
from ..math.constants import CIRCLE_FULL, CROSS_WINDOW
from ..math.utils import normalize_angle


def get_average_value(previous_value: float, new_value: float, alpha: float) -> float:
    """
    Calculate the low-pass filtered average of two angles.

    Both angles are normalized first, they may be passed in any range.
    When the shortest arc between them crosses North, one of them is
    shifted by 360 degrees, so 358 and 2 average towards 0 instead of 180.

    Args:
        previous_value: Previous angle (degrees)
        new_value: New angle (degrees)
        alpha: Filter coefficient in [0, 1], checked by the low-pass filter

    Returns:
        Averaged angle in [0, 360)
    """
    lower_window = CROSS_WINDOW
    upper_window = CIRCLE_FULL - CROSS_WINDOW
    previous_value = normalize_angle(previous_value)
    new_value = normalize_angle(new_value)

    if (0 <= new_value < lower_window
            and upper_window < previous_value < CIRCLE_FULL
            and abs(new_value + CIRCLE_FULL - previous_value) < CROSS_WINDOW):
        new_value += CIRCLE_FULL
    elif (upper_window < new_value < CIRCLE_FULL
            and 0 <= previous_value < lower_window
            and abs(previous_value + CIRCLE_FULL - new_value) < CROSS_WINDOW):
        previous_value += CIRCLE_FULL

    return normalize_angle(filter_value(previous_value, new_value, alpha))
