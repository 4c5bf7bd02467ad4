"""
Mathematical utilities for navigation calculations.
"""

from .utils import (normalize_angle, inverse_angle, haversine_distance,
                    calculate_bearing, destination_point, rotation_matrix,
                    orientation_angles)
from .timestamps import timestamp_nano, is_timestamp_recent
from .constants import *

__all__ = ["normalize_angle", "inverse_angle", "haversine_distance",
           "calculate_bearing", "destination_point", "rotation_matrix",
           "orientation_angles", "timestamp_nano", "is_timestamp_recent"]
