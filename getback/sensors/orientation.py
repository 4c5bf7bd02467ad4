"""
Device heading from orientation sensors.

The heading is derived either from the accelerometer and magnetometer
(raw sensors) or read from a dedicated orientation sensor that does the
calculation itself.
"""

import logging
import math
import threading
from enum import Enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .source import SensorSample, SensorSource, SensorType
from ..config import Config
from ..exceptions import InvalidArgumentError
from ..filters import filter_value_set, get_average_value
from ..math.constants import (MICRO_IN_NANO, SENSOR_EXPIRE_NS,
                              SENSOR_UPDATE_RATE_US, SENSOR_VALUES_SIZE)
from ..math.timestamps import timestamp_nano, is_received_recently
from ..math.utils import normalize_angle, orientation_angles, rotation_matrix

logger = logging.getLogger(__name__)

OrientationListener = Callable[[], None]


class OrientationSensorMode(Enum):
    """Which sensors provide the heading."""
    AUTO = "auto"
    RAW = "raw"
    CALCULATED = "calculated"


def select_sensors(mode: OrientationSensorMode, has_orientation_sensor: bool,
                   has_raw_sensors: bool) -> Tuple[SensorType, ...]:
    """
    Select the sensors to subscribe to.

    The dedicated orientation sensor is preferred in calculated and auto
    mode, the accelerometer and magnetometer pair is used otherwise.

    Args:
        mode: Configured orientation sensor mode
        has_orientation_sensor: Device has a dedicated orientation sensor
        has_raw_sensors: Device has both accelerometer and magnetometer

    Returns:
        Sensor types to subscribe to, empty if none are usable
    """
    if (mode in (OrientationSensorMode.CALCULATED, OrientationSensorMode.AUTO)
            and has_orientation_sensor):
        return (SensorType.ORIENTATION,)
    if has_raw_sensors:
        return (SensorType.ACCELEROMETER, SensorType.MAGNETIC_FIELD)
    return ()


class SensorOrientation:
    """
    Fuses orientation sensor samples into a filtered heading.

    Samples arriving faster than the sensor update rate are dropped.
    Sensor subscription is started when the first listener is added and
    stopped when the last one is removed.

    Mutating calls are expected to come from a single thread.
    """

    def __init__(self, sensor_source: SensorSource, config: Optional[Config] = None,
                 clock: Callable[[], int] = timestamp_nano,
                 low_pass_alpha: Optional[float] = None,
                 orientation_alpha: Optional[float] = None):
        """
        Initialize sensor orientation.

        Args:
            sensor_source: Platform sensor capability
            config: Configuration, read for sensor settings and filter alphas
            clock: Monotonic clock returning nanoseconds
            low_pass_alpha: Overrides the raw vector filter coefficient
            orientation_alpha: Overrides the heading filter coefficient

        Raises:
            InvalidArgumentError: If sensor_source is not defined
        """
        if sensor_source is None:
            raise InvalidArgumentError("sensor_source is not defined")

        self.sensor_source = sensor_source
        self.config = config if config is not None else Config(None)
        self.clock = clock

        self.low_pass_alpha = (low_pass_alpha if low_pass_alpha is not None
                               else self.config.low_pass_alpha)
        self.orientation_alpha = (orientation_alpha if orientation_alpha is not None
                                  else self.config.orientation_alpha)

        # Sensor availability doesn't change at runtime
        self.has_accelerometer = sensor_source.has_sensor(SensorType.ACCELEROMETER)
        self.has_magnetic_field_sensor = sensor_source.has_sensor(SensorType.MAGNETIC_FIELD)
        self.has_orientation_sensor = sensor_source.has_sensor(SensorType.ORIENTATION)

        # Filtered raw sensor values
        self.accelerometer_values: Optional[np.ndarray] = None
        self.magnetic_field_values: Optional[np.ndarray] = None

        # Event timestamps (ns), used for throttling
        self.accelerometer_timestamp: Optional[int] = None
        self.magnetic_field_timestamp: Optional[int] = None
        self.orientation_timestamp: Optional[int] = None
        self.calculated_orientation_timestamp: Optional[int] = None  # derived heading

        # Clock timestamps (ns) of the last accepted sample, used for freshness
        self.accelerometer_received: Optional[int] = None
        self.magnetic_field_received: Optional[int] = None
        self.orientation_received: Optional[int] = None

        self.orientation = 0.0

        # Listeners and sensor subscription
        self._listeners: List[OrientationListener] = []
        self._subscribed: List[SensorType] = []
        self._lock = threading.Lock()

    @property
    def has_raw_sensors(self) -> bool:
        return self.has_accelerometer and self.has_magnetic_field_sensor

    def set_acceleration(self, sample: SensorSample):
        """Set acceleration from an accelerometer sample."""
        if not self._accept(sample, SensorType.ACCELEROMETER, self.accelerometer_timestamp):
            return

        self.accelerometer_values = filter_value_set(
            self.accelerometer_values, sample.vector, self.low_pass_alpha)
        self.accelerometer_timestamp = sample.timestamp
        self.accelerometer_received = self.clock()

        self.calculate_orientation()
        self._on_orientation_change()

    def set_magnetic_field(self, sample: SensorSample):
        """Set magnetic field from a magnetometer sample."""
        if not self._accept(sample, SensorType.MAGNETIC_FIELD, self.magnetic_field_timestamp):
            return

        self.magnetic_field_values = filter_value_set(
            self.magnetic_field_values, sample.vector, self.low_pass_alpha)
        self.magnetic_field_timestamp = sample.timestamp
        self.magnetic_field_received = self.clock()

        self.calculate_orientation()
        self._on_orientation_change()

    def set_orientation(self, sample: SensorSample):
        """Set heading from a dedicated orientation sensor sample."""
        if (sample.sensor_type != SensorType.ORIENTATION
                or self._is_throttled(sample, self.orientation_timestamp)):
            return
        if len(sample.values) == 0:
            logger.debug("Dropping empty orientation sample")
            return

        self.orientation = normalize_angle(sample.values[0])
        self.orientation_timestamp = sample.timestamp
        self.orientation_received = self.clock()

        self._on_orientation_change()

    def on_sensor_changed(self, sample: SensorSample):
        """Sensor source callback, dispatches a sample by sensor type."""
        if sample.sensor_type == SensorType.ACCELEROMETER:
            self.set_acceleration(sample)
        elif sample.sensor_type == SensorType.MAGNETIC_FIELD:
            self.set_magnetic_field(sample)
        elif sample.sensor_type == SensorType.ORIENTATION:
            self.set_orientation(sample)

    def calculate_orientation(self) -> float:
        """
        Update the heading from the accelerometer and magnetometer values.

        Returns:
            Updated heading in degrees, 0 if it could not be calculated
        """
        if (self.accelerometer_values is None
                or len(self.accelerometer_values) != SENSOR_VALUES_SIZE
                or self.magnetic_field_values is None
                or len(self.magnetic_field_values) != SENSOR_VALUES_SIZE):
            return 0.0

        matrix = rotation_matrix(self.accelerometer_values, self.magnetic_field_values)
        if matrix is None:
            return 0.0

        # atan2 yields (-180, 180]
        azimuth = normalize_angle(math.degrees(orientation_angles(matrix)[0]))

        self.orientation = get_average_value(self.orientation, azimuth, self.orientation_alpha)
        self.calculated_orientation_timestamp = max(self.magnetic_field_timestamp,
                                                    self.accelerometer_timestamp)

        return self.orientation

    def has_orientation(self) -> bool:
        """
        Check if a heading can be provided.

        Requires sensors to be enabled and the samples of the used
        sensors to have been received within the last 5 seconds.
        """
        if not self.is_sensors_enabled():
            return False

        now = self.clock()
        raw_recent = (self.has_raw_sensors
                      and is_received_recently(self.accelerometer_received, now, SENSOR_EXPIRE_NS)
                      and is_received_recently(self.magnetic_field_received, now, SENSOR_EXPIRE_NS))
        calculated_recent = (self.has_orientation_sensor
                             and is_received_recently(self.orientation_received, now, SENSOR_EXPIRE_NS))

        return raw_recent or calculated_recent

    def get_orientation(self) -> float:
        """Current heading in degrees [0, 360)."""
        return self.orientation

    def has_sensors(self) -> bool:
        """Check if the device has sensors to determine the heading."""
        return self.has_raw_sensors or self.has_orientation_sensor

    def is_sensors_enabled(self) -> bool:
        """Check if use of the orientation sensors is enabled."""
        return self.config.sensors_enabled

    def sensor_mode(self) -> OrientationSensorMode:
        """Configured orientation sensor mode."""
        mode = self.config.orientation_mode
        if isinstance(mode, OrientationSensorMode):
            return mode
        try:
            return OrientationSensorMode(str(mode).lower())
        except ValueError:
            raise InvalidArgumentError(f"unknown orientation sensor mode: {mode!r}")

    def register_events(self):
        """Subscribe to the sensors selected by the configured mode."""
        if not self.is_sensors_enabled():
            return

        sensors = select_sensors(self.sensor_mode(), self.has_orientation_sensor,
                                 self.has_raw_sensors)
        for sensor_type in sensors:
            if self.sensor_source.register_listener(
                    self.on_sensor_changed, sensor_type, SENSOR_UPDATE_RATE_US):
                self._subscribed.append(sensor_type)

        logger.info("Subscribed to sensors: %s",
                    ", ".join(s.value for s in self._subscribed) or "none")

    def unregister_events(self):
        """Unsubscribe from all subscribed sensors."""
        for sensor_type in self._subscribed:
            self.sensor_source.unregister_listener(self.on_sensor_changed, sensor_type)
        if self._subscribed:
            logger.info("Unsubscribed from sensors")
        self._subscribed = []

    def add_event_listener(self, listener: OrientationListener):
        """
        Add a listener called after each accepted sample.

        Sensors are subscribed to when the first listener is added.
        """
        with self._lock:
            self._listeners.append(listener)
            if len(self._listeners) == 1:
                try:
                    self.register_events()
                except InvalidArgumentError:
                    self._listeners.remove(listener)
                    raise

    def remove_event_listener(self, listener: OrientationListener):
        """
        Remove a listener.

        Sensors are unsubscribed from when the last listener is removed.
        """
        with self._lock:
            if listener not in self._listeners:
                return
            self._listeners.remove(listener)
            if not self._listeners:
                self.unregister_events()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _accept(self, sample: SensorSample, sensor_type: SensorType,
                last_timestamp: Optional[int]) -> bool:
        """Check type, rate and shape of a raw sensor sample."""
        if sample.sensor_type != sensor_type or self._is_throttled(sample, last_timestamp):
            return False

        if len(sample.values) != SENSOR_VALUES_SIZE:
            logger.debug("Dropping %s sample with %d values",
                         sensor_type.value, len(sample.values))
            return False

        return True

    def _is_throttled(self, sample: SensorSample, last_timestamp: Optional[int]) -> bool:
        """Reject samples arriving sooner than the sensor update rate."""
        if sample.timestamp < 0:
            logger.debug("Dropping %s sample with negative timestamp",
                         sample.sensor_type.value)
            return True

        return is_received_recently(last_timestamp, sample.timestamp,
                                    SENSOR_UPDATE_RATE_US * MICRO_IN_NANO)

    def _on_orientation_change(self):
        """Notify all listeners."""
        for listener in list(self._listeners):
            listener()
