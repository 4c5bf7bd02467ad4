"""
Navigation session tying location updates and orientation sensors together.
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from .navigator import Navigator
from ..sensors.location import GeoFix
from ..sensors.orientation import SensorOrientation

logger = logging.getLogger(__name__)

UpdateListener = Callable[[], None]


class NavigationSession:
    """
    Feeds location fixes and sensor updates to a navigator.

    Location fixes are filtered before they reach the navigator:
    duplicates and fixes that are not newer than the current one are
    dropped, so the previous location always is an older fix.
    """

    def __init__(self, navigator: Optional[Navigator] = None,
                 sensor_orientation: Optional[SensorOrientation] = None):
        """
        Initialize navigation session.

        Args:
            navigator: Navigator to feed, created when not provided
            sensor_orientation: Sensor heading, subscribed to while the session runs
        """
        self.sensor_orientation = sensor_orientation
        if navigator is None:
            navigator = Navigator(sensor_orientation)
        self.navigator = navigator

        self._listeners: List[UpdateListener] = []
        self._lock = threading.Lock()
        self.running = False

        # Statistics
        self.fixes_accepted = 0
        self.fixes_rejected = 0

    def start(self):
        """Start listening to orientation sensor updates."""
        if self.running:
            return

        if self.sensor_orientation is not None:
            self.sensor_orientation.add_event_listener(self._on_orientation_changed)

        self.running = True
        logger.info("Navigation session started")

    def stop(self):
        """Stop listening to orientation sensor updates."""
        if not self.running:
            return

        if self.sensor_orientation is not None:
            self.sensor_orientation.remove_event_listener(self._on_orientation_changed)

        self.running = False
        logger.info("Navigation session stopped")

    def set_location(self, location: Optional[GeoFix]) -> bool:
        """
        Update the current location.

        Args:
            location: New location fix

        Returns:
            True if the fix was passed to the navigator
        """
        current = self.navigator.get_location()

        # don't update if no location is provided, if it is the same as the
        # current one, or if it is not more recent than the current one
        if location is None:
            return False
        if current is not None and (
                (location.time_ms == current.time_ms and location.provider == current.provider)
                or not current.is_newer(location)):
            self.fixes_rejected += 1
            logger.debug("Ignoring fix at %d, current fix is at %d",
                         location.time_ms, current.time_ms)
            return False

        self.navigator.set_location(location)
        self.fixes_accepted += 1

        self._notify()
        return True

    def get_location(self) -> Optional[GeoFix]:
        return self.navigator.get_location()

    def set_destination(self, destination: Optional[GeoFix]):
        self.navigator.set_destination(destination)
        self._notify()

    def get_destination(self) -> Optional[GeoFix]:
        return self.navigator.get_destination()

    def store_current_location(self, name: str = "") -> bool:
        """
        Use the current location as destination.

        Args:
            name: Descriptive name, stored as the provider of the destination

        Returns:
            True if a current location was available
        """
        current = self.navigator.get_location()
        if current is None:
            logger.info("No current location to store")
            return False

        destination = replace(current, provider=name) if name else current
        self.set_destination(destination)
        logger.info("Stored destination %.6f, %.6f", destination.latitude, destination.longitude)
        return True

    def restore(self, current: Optional[GeoFix] = None, previous: Optional[GeoFix] = None,
                destination: Optional[GeoFix] = None):
        """Restore a saved state (current, previous location and destination)."""
        self.navigator.set_location(current)
        self.navigator.set_previous_location(previous)
        self.navigator.set_destination(destination)

    def add_location_listener(self, listener: UpdateListener):
        """Add a listener called on location, destination and orientation updates."""
        with self._lock:
            self._listeners.append(listener)

    def remove_location_listener(self, listener: UpdateListener):
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def status(self) -> Dict[str, Any]:
        """Get navigation state, numeric values are None when not accurate."""
        navigator = self.navigator
        location_accurate = navigator.is_location_accurate()
        bearing_accurate = navigator.is_bearing_accurate()
        has_destination = navigator.get_destination() is not None

        return {
            'location_accurate': location_accurate,
            'bearing_accurate': bearing_accurate,
            'sensor_bearing_accurate': navigator.is_sensor_bearing_accurate(),
            'destination_reached': navigator.is_destination_reached(),
            'distance': navigator.get_distance() if location_accurate and has_destination else None,
            'height_difference': (navigator.get_height_difference()
                                  if location_accurate and has_destination else None),
            'absolute_direction': (navigator.get_absolute_direction()
                                   if location_accurate and has_destination else None),
            'relative_direction': (navigator.get_relative_direction()
                                   if bearing_accurate and location_accurate
                                   and has_destination else None),
            'current_bearing': navigator.get_current_bearing() if bearing_accurate else None,
            'current_speed': navigator.get_current_speed() if location_accurate else None,
            'sensor_bearing_offset': navigator.get_sensor_bearing_offset(),
            'fixes_accepted': self.fixes_accepted,
            'fixes_rejected': self.fixes_rejected
        }

    def _on_orientation_changed(self):
        self._notify()

    def _notify(self):
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener()
