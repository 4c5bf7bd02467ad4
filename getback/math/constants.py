"""
Mathematical and physical constants for navigation.
"""

# Angles (degrees)
CIRCLE_ZERO = 0.0
CIRCLE_HALF = 180.0
CIRCLE_FULL = 360.0

# Earth parameters
EARTH_RADIUS_M = 6371000.0  # Earth radius in meters
GRAVITY_MS2 = 9.80665       # Standard gravity in m/s²

# Conversion factors
MILLI_IN_NANO = 1000000
MICRO_IN_NANO = 1000
SECOND_IN_MILLIS = 1000

# Location thresholds
ACCURACY_LIMIT_M = 50.0                       # Maximum accuracy radius of a usable fix
LOCATION_EXPIRE_MS = 300000                   # 5 minutes
LOCATION_EXPIRE_NS = LOCATION_EXPIRE_MS * MILLI_IN_NANO

# Sensor thresholds
SENSOR_EXPIRE_NS = 5000 * MILLI_IN_NANO       # 5 seconds
SENSOR_UPDATE_RATE_US = 200000                # Minimum interval between samples
SENSOR_VALUES_SIZE = 3

# Rotation matrix rejection limits
FREE_FALL_GRAVITY_SQUARED = 0.01 * GRAVITY_MS2 * GRAVITY_MS2
MIN_HORIZONTAL_FIELD = 0.1

# Filter parameters (tuned experimentally)
LOW_PASS_ALPHA = 0.6             # Raw accelerometer/magnetometer vectors
ALPHA_ORIENTATION_SENSORS = 0.05 # Azimuth derived from the raw vectors

# Circular average seam crossing window (degrees)
CROSS_WINDOW = 180.0
