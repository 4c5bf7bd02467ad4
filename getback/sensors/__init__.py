"""
Location fixes and orientation sensor processing.
"""

from .location import GeoFix
from .source import SensorType, SensorSample, SensorSource, SimulatedSensorSource
from .orientation import OrientationSensorMode, SensorOrientation, select_sensors

__all__ = ["GeoFix", "SensorType", "SensorSample", "SensorSource",
           "SimulatedSensorSource", "OrientationSensorMode", "SensorOrientation",
           "select_sensors"]
