"""
Navigator towards a destination, combining location and sensor bearing.
"""

import logging
from typing import Callable, Optional

from ..math.constants import ACCURACY_LIMIT_M, SECOND_IN_MILLIS
from ..math.timestamps import timestamp_nano
from ..math.utils import normalize_angle
from ..sensors.location import GeoFix
from ..sensors.orientation import SensorOrientation

logger = logging.getLogger(__name__)


class Navigator:
    """
    Calculates distance, direction and speed towards a destination.

    The current bearing comes from the orientation sensors when they
    provide a heading, calibrated with an offset to the last trusted
    location based bearing, and from consecutive location fixes
    otherwise. Every numeric getter returns a zero value when its
    accuracy predicate is false, so callers should check the predicate.
    """

    ACCURACY_LIMIT = ACCURACY_LIMIT_M
    DIST_ZERO = 0.0
    DIR_ZERO = 0.0
    SPEED_ZERO = 0.0

    def __init__(self, sensor_orientation: Optional[SensorOrientation] = None,
                 clock: Callable[[], int] = timestamp_nano):
        """
        Initialize navigator.

        Args:
            sensor_orientation: Source of the sensor based heading, if any
            clock: Monotonic clock in nanoseconds, used to check if fixes are recent
        """
        self.sensor_orientation = sensor_orientation
        self.clock = clock

        self.current_location: Optional[GeoFix] = None
        self.previous_location: Optional[GeoFix] = None
        self.destination: Optional[GeoFix] = None

        # Offset between sensor heading and location bearing
        self.sensor_bearing_offset = 0.0

    def set_location(self, location: Optional[GeoFix]):
        """
        Set the current location.

        The current location becomes the previous location, no matter
        whether the new fix is newer. Filtering duplicate or out of order
        fixes is up to the caller.
        """
        self.previous_location = self.current_location
        self.current_location = location

        self.calculate_sensor_bearing_offset()

    def set_previous_location(self, location: Optional[GeoFix]):
        """
        Set the previous location, only to restore a previous state.

        Use set_location() for normal operation.
        """
        self.previous_location = location

    def get_location(self) -> Optional[GeoFix]:
        return self.current_location

    def get_previous_location(self) -> Optional[GeoFix]:
        return self.previous_location

    def set_destination(self, destination: Optional[GeoFix]):
        self.destination = destination

    def get_destination(self) -> Optional[GeoFix]:
        return self.destination

    def get_distance(self) -> float:
        """Distance to the destination in meters."""
        if self.current_location is None or self.destination is None:
            return self.DIST_ZERO
        return self.current_location.distance_to(self.destination)

    def get_height_difference(self) -> float:
        """Altitude of the destination relative to the current location, in meters."""
        if (self.current_location is None or self.destination is None
                or not self.current_location.has_altitude
                or not self.destination.has_altitude):
            return self.DIST_ZERO
        return self.destination.altitude - self.current_location.altitude

    def get_absolute_direction(self) -> float:
        """Direction to the destination in degrees relative to North."""
        if self.current_location is None or self.destination is None:
            return self.DIR_ZERO
        return normalize_angle(self.current_location.bearing_to(self.destination))

    def get_sensor_bearing_offset(self) -> float:
        return self.sensor_bearing_offset

    def get_relative_direction(self) -> float:
        """Direction to the destination in degrees relative to the current bearing."""
        if not self.is_bearing_accurate():
            return self.DIR_ZERO

        return normalize_angle(self.get_absolute_direction() - self.get_current_bearing())

    def is_destination_reached(self) -> bool:
        """
        Check if the destination is reached.

        The destination is reached when it lies within the accuracy
        radius of an accurate current location.
        """
        return (self.is_location_accurate() and self.destination is not None
                and self.get_distance() < self.current_location.accuracy_radius)

    def get_current_speed(self) -> float:
        """
        Current speed in m/s.

        The speed reported by the fix is used when available, otherwise
        it is derived from the previous fix, provided the distance
        between both exceeds the accuracy of each fix.
        """
        current = self.current_location
        previous = self.previous_location

        if current is None:
            return self.SPEED_ZERO

        if current.has_speed:
            return current.speed

        if previous is None or current == previous:
            return self.SPEED_ZERO

        distance = current.distance_to(previous)
        time_ms = current.time_ms - previous.time_ms

        if (time_ms > 0
                and distance > current.accuracy_radius
                and distance > previous.accuracy_radius):
            return distance / (time_ms / SECOND_IN_MILLIS)

        return self.SPEED_ZERO

    def get_current_bearing(self) -> float:
        """Most accurate current bearing in degrees relative to North."""
        if self.is_sensor_bearing_accurate():
            return normalize_angle(self.sensor_orientation.get_orientation()
                                   - self.sensor_bearing_offset)
        return self.get_location_bearing()

    def get_location_bearing(self) -> float:
        """Location based bearing in degrees relative to North."""
        if self.current_location is not None and self.current_location.has_bearing:
            return normalize_angle(self.current_location.bearing)

        if self.is_location_bearing_accurate():
            return normalize_angle(self.previous_location.bearing_to(self.current_location))

        return self.DIR_ZERO

    def is_location_accurate(self) -> bool:
        """Check if the current location is set, recent and accurate enough."""
        return (self.current_location is not None
                and self.current_location.is_recent(self.clock())
                and self.current_location.accuracy_radius <= self.ACCURACY_LIMIT)

    def is_bearing_accurate(self) -> bool:
        """Check if either the sensor or the location based bearing is accurate."""
        return self.is_sensor_bearing_accurate() or self.is_location_bearing_accurate()

    def is_sensor_bearing_accurate(self) -> bool:
        return (self.sensor_orientation is not None
                and self.sensor_orientation.has_orientation())

    def is_location_bearing_accurate(self) -> bool:
        """
        Check if the bearing between previous and current location is accurate.

        Requires an accurate current location, a recent previous location
        different from the current one, and a distance between both
        larger than the current accuracy.
        """
        return (self.is_location_accurate()
                and self.previous_location is not None
                and self.previous_location.is_recent(self.clock())
                and self.previous_location != self.current_location
                and self.previous_location.distance_to(self.current_location)
                > self.current_location.accuracy_radius)

    def calculate_sensor_bearing_offset(self):
        """Calibrate the sensor heading against the location based bearing."""
        if (self.is_sensor_bearing_accurate()
                and ((self.current_location is not None and self.current_location.has_bearing)
                     or self.is_location_bearing_accurate())):
            self.sensor_bearing_offset = (self.sensor_orientation.get_orientation()
                                          - self.get_location_bearing())
            logger.debug("Sensor bearing offset: %.1f", self.sensor_bearing_offset)
        else:
            self.sensor_bearing_offset = 0.0
