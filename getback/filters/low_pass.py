"""
Exponential low-pass filter for sensor values.
"""

import numpy as np
from ..exceptions import InvalidArgumentError

ALPHA_RANGE_MESSAGE = "parameter alpha is not in range 0.0 .. 1.0"


def filter_value(previous_value: float, new_value: float, alpha: float) -> float:
    """
    Low-pass filter a single value, topping off high frequency changes.

    Args:
        previous_value: Previous (filtered) value
        new_value: New sensor value
        alpha: Filter coefficient, 0 keeps previous_value, 1 returns new_value

    Returns:
        Filtered value

    Raises:
        InvalidArgumentError: If alpha is outside [0, 1]
    """
    if alpha > 1 or alpha < 0:
        raise InvalidArgumentError(ALPHA_RANGE_MESSAGE)

    return previous_value + alpha * (new_value - previous_value)


def filter_value_set(previous_array, new_array, alpha: float) -> np.ndarray:
    """
    Low-pass filter a set of unrelated values in parallel.

    Each position holds a separate signal (e.g. the x, y and z axis of
    one sensor). This is not a FIFO of consecutive values of the same
    signal.

    Args:
        previous_array: Previous (filtered) values, None on the first sample
        new_array: New sensor values
        alpha: Filter coefficient in [0, 1]

    Returns:
        np.ndarray with the filtered values

    Raises:
        InvalidArgumentError: If new_array is empty, if the lengths differ
            or if alpha is outside [0, 1]
    """
    if new_array is None or len(new_array) == 0:
        raise InvalidArgumentError(
            "parameter new_array should not be an empty array")

    new_values = np.asarray(new_array, dtype=np.float64)

    # Cold start, nothing to smooth against
    if previous_array is None or len(previous_array) == 0:
        return new_values.copy()

    previous_values = np.asarray(previous_array, dtype=np.float64)

    if len(previous_values) != len(new_values):
        raise InvalidArgumentError(
            f"parameter previous_array (length = {len(previous_values)}) should have "
            f"the same size as parameter new_array (length = {len(new_values)})")

    if alpha > 1 or alpha < 0:
        raise InvalidArgumentError(ALPHA_RANGE_MESSAGE)

    return previous_values + alpha * (new_values - previous_values)
