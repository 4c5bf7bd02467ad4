"""
Location fixes delivered by a location provider.
"""

import time
from dataclasses import dataclass, field
from typing import Optional
from ..math.constants import LOCATION_EXPIRE_NS
from ..math.timestamps import timestamp_nano, is_received_recently
from ..math.utils import haversine_distance, calculate_bearing


@dataclass(frozen=True)
class GeoFix:
    """
    A single timestamped location reading.

    Optional values (altitude, bearing, speed, accuracy) are None when
    the provider did not report them.
    """

    # Position (decimal degrees)
    latitude: float
    longitude: float
    altitude: Optional[float] = None    # meters

    # Movement
    bearing: Optional[float] = None     # degrees, clockwise from North
    speed: Optional[float] = None       # m/s

    # Quality
    accuracy: Optional[float] = None    # radius in meters

    # Timestamps
    time_ms: int = field(default_factory=lambda: int(time.time() * 1000))  # wall clock
    elapsed_realtime_ns: int = field(default_factory=timestamp_nano)  # monotonic clock

    provider: str = ""

    @property
    def has_altitude(self) -> bool:
        return self.altitude is not None

    @property
    def has_bearing(self) -> bool:
        return self.bearing is not None

    @property
    def has_speed(self) -> bool:
        return self.speed is not None

    @property
    def has_accuracy(self) -> bool:
        return self.accuracy is not None

    @property
    def accuracy_radius(self) -> float:
        """Accuracy radius in meters, 0.0 if the provider reported none."""
        return self.accuracy if self.accuracy is not None else 0.0

    def distance_to(self, other: "GeoFix") -> float:
        """Great circle distance to another fix, in meters."""
        return haversine_distance(self.latitude, self.longitude,
                                  other.latitude, other.longitude)

    def bearing_to(self, other: "GeoFix") -> float:
        """Initial bearing towards another fix, in degrees [0, 360)."""
        return calculate_bearing(self.latitude, self.longitude,
                                 other.latitude, other.longitude)

    def is_newer(self, other: "GeoFix") -> bool:
        """Check if the other fix was taken later than this one."""
        return other.time_ms > self.time_ms

    def is_recent(self, now: Optional[int] = None) -> bool:
        """
        Check if the fix is recent.

        Args:
            now: Current monotonic timestamp in nanoseconds,
                defaults to the system monotonic clock

        Returns:
            True if the fix is at most 5 minutes old
        """
        if now is None:
            now = timestamp_nano()
        return is_received_recently(self.elapsed_realtime_ns, now, LOCATION_EXPIRE_NS)
