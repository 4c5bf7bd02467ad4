"""
Navigation core for returning to a recorded location.

This package provides platform-independent implementations of:
- Low-pass and circular averaging filters
- Heading fusion from accelerometer and magnetometer samples
- A navigator combining location fixes and sensor heading
"""

__version__ = "1.0.0"
__author__ = "Getback Team"

from .filters import filter_value, filter_value_set, get_average_value
from .sensors import GeoFix, SensorOrientation, SensorSample, SensorType
from .navigation import Navigator, NavigationSession
from .math import normalize_angle
from .config import Config
from .exceptions import InvalidArgumentError

__all__ = [
    "filter_value",
    "filter_value_set",
    "get_average_value",
    "GeoFix",
    "SensorOrientation",
    "SensorSample",
    "SensorType",
    "Navigator",
    "NavigationSession",
    "normalize_angle",
    "Config",
    "InvalidArgumentError"
]
