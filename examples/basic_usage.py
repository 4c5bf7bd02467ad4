#!/usr/bin/env python3
"""
Basic usage example of the navigation system.

This example stores a location, walks away from it and navigates back,
using simulated location fixes and orientation sensors instead of a
real device.
"""

import sys
import os
import numpy as np

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from getback.config import Config, setup_logging
from getback.math import destination_point
from getback.navigation import Navigator, NavigationSession
from getback.sensors import (GeoFix, SensorOrientation, SensorSample, SensorType,
                             SimulatedSensorSource)

SECOND = 1000000000


class SimulationClock:
    """Monotonic clock driven by the simulation."""

    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def simulate_walk(clock, start_lat=51.05, start_lon=3.72, duration=60, walk_speed=1.4):
    """
    Simulate a walk, East for half the duration, then back West.

    Args:
        clock: Simulation clock, advanced one second per step
        start_lat, start_lon: Starting position (degrees)
        duration: Simulation duration in seconds
        walk_speed: Walking speed in m/s

    Yields:
        (location fix, heading) tuples, one per second
    """
    gps_noise = 1.5  # meters
    heading_noise = 3.0  # degrees
    start_time_ms = 1700000000000

    for t in range(duration):
        clock.now = t * SECOND

        if t < duration // 2:
            heading = 90.0
            distance = walk_speed * t
        else:
            heading = 270.0
            distance = walk_speed * (duration - t)

        lat, lon = destination_point(start_lat, start_lon, 90.0, distance)
        lat, lon = destination_point(lat, lon, np.random.uniform(0, 360),
                                     abs(np.random.normal(0, gps_noise)))

        fix = GeoFix(latitude=lat, longitude=lon, altitude=12.0,
                     accuracy=5.0 + abs(np.random.normal(0, 1.0)),
                     time_ms=start_time_ms + t * 1000,
                     elapsed_realtime_ns=clock.now,
                     provider="simulated")

        yield fix, heading + np.random.normal(0, heading_noise)


def emit_heading(source, heading, timestamp):
    """Emit accelerometer and magnetometer samples of a flat device."""
    theta = np.radians(heading)
    field = (-20.0 * np.sin(theta), 20.0 * np.cos(theta), -40.0)

    source.emit(SensorSample(SensorType.ACCELEROMETER, (0.0, 0.0, 9.81), timestamp))
    source.emit(SensorSample(SensorType.MAGNETIC_FIELD, field, timestamp))


def main():
    """Main example function."""
    config = Config(None)
    config.set("logging.level", "WARNING")
    setup_logging(config)

    print("Getback - Basic Usage Example")
    print("=" * 50)

    clock = SimulationClock()
    source = SimulatedSensorSource([SensorType.ACCELEROMETER, SensorType.MAGNETIC_FIELD])
    orientation = SensorOrientation(source, config, clock=clock, orientation_alpha=0.5)
    navigator = Navigator(orientation, clock=clock)
    session = NavigationSession(navigator, orientation)

    session.start()
    print(f"Orientation sensors available: {orientation.has_sensors()}")
    print()

    print("Walking East for 30 seconds, then back West...")
    print()

    last_print_time = -5
    print_interval = 5  # Print status every 5 seconds

    for fix, heading in simulate_walk(clock):
        emit_heading(source, heading, clock.now)
        session.set_location(fix)

        # Store the starting point as destination
        if session.get_destination() is None:
            session.store_current_location("start")

        elapsed = clock.now // SECOND
        if elapsed - last_print_time >= print_interval:
            print_status(elapsed, session.status())
            last_print_time = elapsed

    session.stop()

    status = session.status()
    print("\nSimulation completed!")
    print("\n=== Final Statistics ===")
    print(f"Fixes accepted: {status['fixes_accepted']}")
    print(f"Fixes rejected: {status['fixes_rejected']}")
    print(f"Sensor samples: {source.samples_emitted}")
    print(f"Destination reached: {status['destination_reached']}")


def print_status(elapsed, status):
    """Print current navigation status."""
    def fmt(value, unit, width=6):
        return "n/a" if value is None else f"{value:{width}.1f} {unit}"

    print(f"Time: {elapsed}s")
    print(f"  Distance:  {fmt(status['distance'], 'm')}")
    print(f"  Direction: {fmt(status['absolute_direction'], 'deg')} "
          f"(relative {fmt(status['relative_direction'], 'deg')})")
    print(f"  Bearing:   {fmt(status['current_bearing'], 'deg')} "
          f"(sensor offset {status['sensor_bearing_offset']:.1f} deg)")
    print(f"  Speed:     {fmt(status['current_speed'], 'm/s')}")
    print(f"  Reached:   {status['destination_reached']}")
    print()


if __name__ == "__main__":
    main()
