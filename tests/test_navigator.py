#!/usr/bin/env python3
"""
Unit tests for the navigator.
"""

import unittest
from unittest.mock import Mock
import sys
import os

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from getback.math import destination_point
from getback.navigation import Navigator
from getback.sensors import GeoFix

SECOND = 1000000000
START_TIME_MS = 1700000000000

LATITUDE = 51.05
LONGITUDE = 3.72


class TestNavigator(unittest.TestCase):
    """Test Navigator with real location fixes."""

    def setUp(self):
        """Set up test fixtures."""
        self.now = 1000 * SECOND
        self.navigator = Navigator(clock=lambda: self.now)
        self.start = self._fix(LATITUDE, LONGITUDE)

    def _fix(self, latitude, longitude, accuracy=10.0, time_ms=START_TIME_MS, **kwargs):
        kwargs.setdefault('elapsed_realtime_ns', self.now)
        return GeoFix(latitude, longitude, accuracy=accuracy, time_ms=time_ms, **kwargs)

    def _fix_at(self, origin, bearing, distance, **kwargs):
        """Fix at distance (m) and bearing (degrees) from origin."""
        latitude, longitude = destination_point(origin.latitude, origin.longitude,
                                                bearing, distance)
        return self._fix(latitude, longitude, **kwargs)

    def _sensor(self, heading, has_orientation=True):
        sensor = Mock()
        sensor.has_orientation.return_value = has_orientation
        sensor.get_orientation.return_value = heading
        self.navigator.sensor_orientation = sensor
        return sensor

    def test_no_values(self):
        """Test all values are zero without location and destination."""
        self.assertIsNone(self.navigator.get_location())
        self.assertIsNone(self.navigator.get_previous_location())
        self.assertIsNone(self.navigator.get_destination())

        self.assertEqual(self.navigator.get_distance(), 0.0)
        self.assertEqual(self.navigator.get_height_difference(), 0.0)
        self.assertEqual(self.navigator.get_absolute_direction(), 0.0)
        self.assertEqual(self.navigator.get_relative_direction(), 0.0)
        self.assertEqual(self.navigator.get_current_bearing(), 0.0)
        self.assertEqual(self.navigator.get_current_speed(), 0.0)
        self.assertEqual(self.navigator.get_sensor_bearing_offset(), 0.0)

        self.assertFalse(self.navigator.is_location_accurate())
        self.assertFalse(self.navigator.is_bearing_accurate())
        self.assertFalse(self.navigator.is_sensor_bearing_accurate())
        self.assertFalse(self.navigator.is_location_bearing_accurate())
        self.assertFalse(self.navigator.is_destination_reached())

    def test_set_location(self):
        """Test the current location moves to previous location."""
        second = self._fix_at(self.start, 90, 20, time_ms=START_TIME_MS + 1000)

        self.navigator.set_location(self.start)
        self.assertIs(self.navigator.get_location(), self.start)
        self.assertIsNone(self.navigator.get_previous_location())

        self.navigator.set_location(second)
        self.assertIs(self.navigator.get_location(), second)
        self.assertIs(self.navigator.get_previous_location(), self.start)

        self.navigator.set_location(None)
        self.assertIsNone(self.navigator.get_location())
        self.assertIs(self.navigator.get_previous_location(), second)

    def test_set_location_older_fix(self):
        """Test an older fix still replaces the current location."""
        older = self._fix_at(self.start, 90, 20, time_ms=START_TIME_MS - 1000)

        self.navigator.set_location(self.start)
        self.navigator.set_location(older)

        self.assertIs(self.navigator.get_location(), older)
        self.assertIs(self.navigator.get_previous_location(), self.start)

    def test_set_previous_location(self):
        self.navigator.set_previous_location(self.start)

        self.assertIs(self.navigator.get_previous_location(), self.start)
        self.assertIsNone(self.navigator.get_location())

    def test_distance_and_direction(self):
        """Test distance and direction towards the destination."""
        destination = self._fix_at(self.start, 45, 100)
        self.navigator.set_location(self.start)
        self.navigator.set_destination(destination)

        self.assertIs(self.navigator.get_destination(), destination)
        self.assertAlmostEqual(self.navigator.get_distance(), 100.0, places=3)
        self.assertAlmostEqual(self.navigator.get_absolute_direction(), 45.0, places=3)

    def test_direction_west(self):
        self.navigator.set_location(self.start)
        self.navigator.set_destination(self._fix_at(self.start, 270, 500))

        self.assertAlmostEqual(self.navigator.get_absolute_direction(), 270.0, places=2)

    def test_relative_direction(self):
        """Test direction relative to the sensor bearing."""
        self._sensor(45.0)
        self.navigator.set_location(self.start)
        self.navigator.set_destination(self._fix_at(self.start, 160, 100))

        self.assertTrue(self.navigator.is_bearing_accurate())
        self.assertEqual(self.navigator.get_current_bearing(), 45.0)
        self.assertAlmostEqual(self.navigator.get_relative_direction(), 115.0, places=3)

    def test_relative_direction_normalized(self):
        self._sensor(300.0)
        self.navigator.set_location(self.start)
        self.navigator.set_destination(self._fix_at(self.start, 30, 100))

        self.assertAlmostEqual(self.navigator.get_relative_direction(), 90.0, places=3)

    def test_relative_direction_without_bearing(self):
        self._sensor(45.0, has_orientation=False)
        self.navigator.set_location(self.start)
        self.navigator.set_destination(self._fix_at(self.start, 160, 100))

        self.assertFalse(self.navigator.is_bearing_accurate())
        self.assertEqual(self.navigator.get_relative_direction(), 0.0)

    def test_height_difference(self):
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, altitude=10.0))
        self.navigator.set_destination(self._fix(LATITUDE, LONGITUDE, altitude=25.0))
        self.assertEqual(self.navigator.get_height_difference(), 15.0)

        # destination without altitude
        self.navigator.set_destination(self._fix(LATITUDE, LONGITUDE))
        self.assertEqual(self.navigator.get_height_difference(), 0.0)

    def test_destination_reached(self):
        """Test destination is reached within the accuracy radius."""
        self.navigator.set_location(self.start)
        self.navigator.set_destination(self._fix_at(self.start, 0, 5))
        self.assertTrue(self.navigator.is_destination_reached())

        self.navigator.set_destination(self._fix_at(self.start, 0, 15))
        self.assertFalse(self.navigator.is_destination_reached())

    def test_destination_reached_at_accuracy_boundary(self):
        """Test a destination exactly at the accuracy radius isn't reached."""
        destination = self._fix_at(self.start, 0, 10)
        distance = self.start.distance_to(destination)

        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=distance))
        self.navigator.set_destination(destination)

        self.assertFalse(self.navigator.is_destination_reached())

    def test_destination_not_reached_when_inaccurate(self):
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=60.0))
        self.navigator.set_destination(self._fix_at(self.start, 0, 5))

        self.assertFalse(self.navigator.is_location_accurate())
        self.assertFalse(self.navigator.is_destination_reached())

    def test_location_accuracy(self):
        """Test location accuracy limit of 50 meters."""
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=50.0))
        self.assertTrue(self.navigator.is_location_accurate())

        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=50.1))
        self.assertFalse(self.navigator.is_location_accurate())

        # no reported accuracy counts as exact
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=None))
        self.assertTrue(self.navigator.is_location_accurate())

    def test_location_expires(self):
        """Test location is no longer accurate after 5 minutes."""
        self.navigator.set_location(self.start)

        self.now += 300 * SECOND
        self.assertTrue(self.navigator.is_location_accurate())

        self.now += 1
        self.assertFalse(self.navigator.is_location_accurate())

    def test_speed_from_fixes(self):
        """Test speed derived from two fixes 20 m and 5 seconds apart."""
        self.navigator.set_location(self.start)
        self.navigator.set_location(self._fix_at(self.start, 90, 20,
                                                 time_ms=START_TIME_MS + 5000))

        self.assertAlmostEqual(self.navigator.get_current_speed(), 4.0, places=4)

    def test_speed_within_accuracy(self):
        """Test no speed when the distance is within the accuracy radius."""
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=40.0))
        self.navigator.set_location(self._fix_at(self.start, 90, 20, accuracy=40.0,
                                                 time_ms=START_TIME_MS + 5000))
        self.assertEqual(self.navigator.get_current_speed(), 0.0)

        # previous fix less accurate than the distance travelled
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, accuracy=40.0))
        self.navigator.set_location(self._fix_at(self.start, 90, 20, accuracy=10.0,
                                                 time_ms=START_TIME_MS + 5000))
        self.assertEqual(self.navigator.get_current_speed(), 0.0)

    def test_speed_out_of_order(self):
        self.navigator.set_location(self.start)
        self.navigator.set_location(self._fix_at(self.start, 90, 20,
                                                 time_ms=START_TIME_MS - 5000))

        self.assertEqual(self.navigator.get_current_speed(), 0.0)

    def test_speed_same_fix(self):
        self.navigator.set_location(self.start)
        self.navigator.set_location(self.start)

        self.assertEqual(self.navigator.get_current_speed(), 0.0)

    def test_reported_speed(self):
        """Test speed reported by the fix is preferred."""
        self.navigator.set_location(self.start)
        self.navigator.set_location(self._fix_at(self.start, 90, 20, speed=2.5,
                                                 time_ms=START_TIME_MS + 5000))

        self.assertEqual(self.navigator.get_current_speed(), 2.5)

    def test_location_bearing(self):
        """Test bearing from two consecutive fixes."""
        second = self._fix_at(self.start, 120, 20, time_ms=START_TIME_MS + 5000)
        self.navigator.set_location(self.start)
        self.navigator.set_location(second)

        self.assertTrue(self.navigator.is_location_bearing_accurate())
        self.assertTrue(self.navigator.is_bearing_accurate())
        self.assertAlmostEqual(self.navigator.get_location_bearing(), 120.0, places=3)
        self.assertAlmostEqual(self.navigator.get_current_bearing(),
                               self.start.bearing_to(second), places=9)

    def test_location_bearing_within_accuracy(self):
        self.navigator.set_location(self.start)
        self.navigator.set_location(self._fix_at(self.start, 120, 8,
                                                 time_ms=START_TIME_MS + 5000))

        self.assertFalse(self.navigator.is_location_bearing_accurate())
        self.assertEqual(self.navigator.get_location_bearing(), 0.0)

    def test_location_bearing_previous_expired(self):
        self.navigator.set_location(self.start)
        self.now += 200 * SECOND
        self.navigator.set_location(self._fix_at(self.start, 120, 20,
                                                 time_ms=START_TIME_MS + 200000))

        self.now += 150 * SECOND
        self.assertTrue(self.navigator.is_location_accurate())
        self.assertFalse(self.navigator.is_location_bearing_accurate())

    def test_reported_bearing(self):
        """Test bearing reported by the fix is preferred and normalized."""
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, bearing=370.0))

        self.assertEqual(self.navigator.get_location_bearing(), 10.0)

    def test_sensor_bearing_offset(self):
        """Test sensor heading is calibrated against the location bearing."""
        sensor = self._sensor(100.0)
        second = self._fix_at(self.start, 90, 20, time_ms=START_TIME_MS + 5000)

        self.navigator.set_location(self.start)
        self.assertEqual(self.navigator.get_sensor_bearing_offset(), 0.0)
        self.assertEqual(self.navigator.get_current_bearing(), 100.0)

        self.navigator.set_location(second)
        offset = 100.0 - self.start.bearing_to(second)
        self.assertAlmostEqual(self.navigator.get_sensor_bearing_offset(), offset, places=9)
        self.assertAlmostEqual(self.navigator.get_current_bearing(),
                               self.start.bearing_to(second), places=9)

        # the offset is kept when the sensor heading changes
        sensor.get_orientation.return_value = 130.0
        self.assertAlmostEqual(self.navigator.get_current_bearing(),
                               self.start.bearing_to(second) + 30.0, places=9)

    def test_sensor_bearing_offset_from_reported_bearing(self):
        self._sensor(50.0)
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, bearing=30.0))

        self.assertEqual(self.navigator.get_sensor_bearing_offset(), 20.0)
        self.assertEqual(self.navigator.get_current_bearing(), 30.0)

    def test_sensor_bearing_offset_reset(self):
        """Test the offset is cleared when the location bearing isn't trusted."""
        self._sensor(50.0)
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, bearing=30.0))
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE))

        self.assertEqual(self.navigator.get_sensor_bearing_offset(), 0.0)
        self.assertEqual(self.navigator.get_current_bearing(), 50.0)

    def test_sensor_bearing_offset_wraps(self):
        self._sensor(10.0)
        self.navigator.set_location(self._fix(LATITUDE, LONGITUDE, bearing=350.0))

        self.assertEqual(self.navigator.get_sensor_bearing_offset(), -340.0)
        self.assertEqual(self.navigator.get_current_bearing(), 350.0)


class TestNavigatorMocks(unittest.TestCase):
    """Test Navigator with mocked location fixes."""

    def setUp(self):
        """Set up test fixtures."""
        self.navigator = Navigator(clock=lambda: 0)

    def _location(self, distance=0.0, accuracy=10.0, recent=True, time_ms=0):
        location = Mock()
        location.has_speed = False
        location.has_bearing = False
        location.has_altitude = False
        location.accuracy_radius = accuracy
        location.time_ms = time_ms
        location.is_recent.return_value = recent
        location.distance_to.return_value = distance
        location.bearing_to.return_value = 45.0
        return location

    def test_stale_location(self):
        self.navigator.set_location(self._location(recent=False))
        self.assertFalse(self.navigator.is_location_accurate())

    def test_distance(self):
        location = self._location(distance=123.4)
        destination = self._location()

        self.navigator.set_location(location)
        self.navigator.set_destination(destination)

        self.assertEqual(self.navigator.get_distance(), 123.4)
        location.distance_to.assert_called_with(destination)
        self.assertEqual(self.navigator.get_absolute_direction(), 45.0)

    def test_speed(self):
        previous = self._location(time_ms=1000)
        current = self._location(distance=20.0, time_ms=6000)

        self.navigator.set_location(previous)
        self.navigator.set_location(current)

        self.assertEqual(self.navigator.get_current_speed(), 4.0)


if __name__ == '__main__':
    unittest.main()
