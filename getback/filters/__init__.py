"""
Signal filters for sensor values and angles.
"""

from .low_pass import filter_value, filter_value_set
from .circular_average import get_average_value

__all__ = ["filter_value", "filter_value_set", "get_average_value"]
