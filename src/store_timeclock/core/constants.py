"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000
NO_LOCATION = (0.0, 0.0)

DEFAULT_GEOFENCE_RADIUS_METERS = 500
DEFAULT_POSITION_TIMEOUT_SECONDS = 10.0
DEFAULT_ACTIVITY_LIMIT = 5

SECONDS_PER_HOUR = 3600
