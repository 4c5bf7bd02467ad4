"""
Sensor samples and the sensor source interface.

The sensor source is the platform capability that knows which sensors
exist and delivers their samples to registered callbacks.
"""

import logging
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


class SensorType(Enum):
    """Sensors used to determine the device heading."""
    ACCELEROMETER = "accelerometer"
    MAGNETIC_FIELD = "magnetic_field"
    ORIENTATION = "orientation"


@dataclass(frozen=True)
class SensorSample:
    """A single sensor reading."""

    sensor_type: SensorType
    values: Tuple[float, ...]
    timestamp: int  # event timestamp, ns (monotonic)

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))

    @property
    def vector(self) -> np.ndarray:
        """Get values as numpy array."""
        return np.array(self.values, dtype=np.float64)


SensorCallback = Callable[[SensorSample], None]


class SensorSource:
    """
    Interface to the platform sensors.

    Subclasses implement the actual (un)registration with the platform.
    """

    def has_sensor(self, sensor_type: SensorType) -> bool:
        """Check if the device provides a sensor of this type."""
        raise NotImplementedError

    def register_listener(self, callback: SensorCallback,
                          sensor_type: SensorType, rate_us: int) -> bool:
        """
        Start delivering samples of a sensor to callback.

        Args:
            callback: Called with each SensorSample
            sensor_type: Sensor to subscribe to
            rate_us: Requested interval between samples in microseconds

        Returns:
            True if the subscription succeeded
        """
        raise NotImplementedError

    def unregister_listener(self, callback: SensorCallback,
                            sensor_type: SensorType):
        """Stop delivering samples of a sensor to callback."""
        raise NotImplementedError


class SimulatedSensorSource(SensorSource):
    """
    In-process sensor source.

    Samples are injected with emit() and delivered synchronously to the
    callbacks registered for their sensor type.
    """

    def __init__(self, sensors: Iterable[SensorType] = (SensorType.ACCELEROMETER,
                                                        SensorType.MAGNETIC_FIELD,
                                                        SensorType.ORIENTATION)):
        """
        Initialize simulated sensor source.

        Args:
            sensors: Sensor types the simulated device provides
        """
        self.sensors = frozenset(sensors)
        self.listeners: Dict[SensorType, List[SensorCallback]] = {}

        # Statistics
        self.register_count = 0
        self.unregister_count = 0
        self.samples_emitted = 0

    def has_sensor(self, sensor_type: SensorType) -> bool:
        return sensor_type in self.sensors

    def register_listener(self, callback: SensorCallback,
                          sensor_type: SensorType, rate_us: int) -> bool:
        if sensor_type not in self.sensors:
            logger.warning("Sensor %s not available", sensor_type.value)
            return False

        self.listeners.setdefault(sensor_type, []).append(callback)
        self.register_count += 1
        return True

    def unregister_listener(self, callback: SensorCallback,
                            sensor_type: SensorType):
        callbacks = self.listeners.get(sensor_type, [])
        if callback in callbacks:
            callbacks.remove(callback)
            self.unregister_count += 1

    def is_registered(self, sensor_type: SensorType) -> bool:
        """Check if any callback listens to this sensor type."""
        return bool(self.listeners.get(sensor_type))

    def emit(self, sample: SensorSample) -> int:
        """
        Deliver a sample to the callbacks registered for its type.

        Returns:
            Number of callbacks the sample was delivered to
        """
        callbacks = list(self.listeners.get(sample.sensor_type, []))
        for callback in callbacks:
            callback(sample)

        self.samples_emitted += 1
        return len(callbacks)
