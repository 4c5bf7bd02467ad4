"""
Mathematical utility functions for navigation.
"""

import numpy as np
import math
from typing import Optional, Tuple
from .constants import *


def normalize_angle(angle):
    """
    Normalize angle to [0, 360) range.

    Args:
        angle (float): Angle in degrees

    Returns:
        float: Normalized angle in [0, 360)
    """
    angle = float(angle)
    if CIRCLE_ZERO <= angle < CIRCLE_FULL:
        return angle

    normalized = angle % CIRCLE_FULL
    # -1e-15 % 360 yields 360.0
    if normalized >= CIRCLE_FULL:
        normalized = CIRCLE_ZERO
    return normalized


def inverse_angle(angle):
    """Angle pointing in the opposite direction, in [0, 360)."""
    return normalize_angle(angle - CIRCLE_HALF)


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: Latitude and longitude of first point (degrees)
        lat2, lon2: Latitude and longitude of second point (degrees)

    Returns:
        float: Distance in meters
    """
    # Convert to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return EARTH_RADIUS_M * c


def calculate_bearing(lat1, lon1, lat2, lon2):
    """
    Calculate the initial bearing between two GPS coordinates.

    Args:
        lat1, lon1: Starting latitude and longitude (degrees)
        lat2, lon2: Ending latitude and longitude (degrees)

    Returns:
        float: Bearing in degrees [0, 360), clockwise from North
    """
    # Convert to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    dlon = lon2 - lon1

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return normalize_angle(math.degrees(math.atan2(y, x)))


def destination_point(lat, lon, bearing, distance) -> Tuple[float, float]:
    """
    Calculate the point reached by travelling along a great circle.

    Args:
        lat, lon: Starting latitude and longitude (degrees)
        bearing: Initial bearing (degrees)
        distance: Distance travelled (meters)

    Returns:
        (latitude, longitude) in degrees
    """
    lat1 = math.radians(lat)
    lon1 = math.radians(lon)
    theta = math.radians(bearing)
    delta = distance / EARTH_RADIUS_M

    lat2 = math.asin(math.sin(lat1) * math.cos(delta) +
                     math.cos(lat1) * math.sin(delta) * math.cos(theta))
    lon2 = lon1 + math.atan2(math.sin(theta) * math.sin(delta) * math.cos(lat1),
                             math.cos(delta) - math.sin(lat1) * math.sin(lat2))

    # Keep longitude in [-180, 180)
    lon2 = (lon2 + 3 * math.pi) % (2 * math.pi) - math.pi

    return (math.degrees(lat2), math.degrees(lon2))


def rotation_matrix(gravity, geomagnetic) -> Optional[np.ndarray]:
    """
    Compute the rotation matrix from device to world coordinates.

    World coordinates are East, North, Up. The matrix rows are the
    East, North and Up axes expressed in device coordinates.

    Args:
        gravity: Accelerometer vector [x, y, z] in device coordinates
        geomagnetic: Magnetic field vector [x, y, z] in device coordinates

    Returns:
        3x3 rotation matrix, or None when the device is in free fall
        or the magnetic field is (nearly) vertical
    """
    a = np.asarray(gravity, dtype=np.float64)
    e = np.asarray(geomagnetic, dtype=np.float64)

    norm_sq_a = float(np.dot(a, a))
    if norm_sq_a < FREE_FALL_GRAVITY_SQUARED:
        return None

    h = np.cross(e, a)
    norm_h = float(np.linalg.norm(h))
    if norm_h < MIN_HORIZONTAL_FIELD:
        return None

    h = h / norm_h
    a = a / math.sqrt(norm_sq_a)
    m = np.cross(a, h)

    return np.array([h, m, a])


def orientation_angles(matrix) -> np.ndarray:
    """
    Extract orientation angles from a rotation matrix.

    Args:
        matrix: 3x3 rotation matrix from rotation_matrix()

    Returns:
        np.ndarray: [azimuth, pitch, roll] in radians
    """
    r = np.asarray(matrix, dtype=np.float64)

    azimuth = math.atan2(r[0, 1], r[1, 1])
    pitch = math.asin(max(-1.0, min(1.0, -r[2, 1])))
    roll = math.atan2(-r[2, 0], r[2, 2])

    return np.array([azimuth, pitch, roll])
