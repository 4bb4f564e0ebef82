"""Shared application constants.

Centralizes repeat values used across entry, import and progress logic so we
can document and adjust them in one place.
"""

# Distance of one statute mile in meters
MILE_M = 1609.34

# Mean Earth radius in meters (haversine)
EARTH_RADIUS_M = 6371000.0

# Activity files accepted by the run import endpoint
ACTIVITY_EXTENSIONS = (".gpx", ".fit")

# Profile picture uploads
PICTURE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".webp")
PICTURE_MAX_BYTES = 5 * 1024 * 1024

# Shown in chat and on the leaderboard when a user has no username yet
ANONYMOUS_USERNAME = "Anonymous"

# Upper bound (exclusive) for weights and distances; columns are Numeric(6, 2)
MAX_MEASUREMENT = 10000

# Number of users featured in the leaderboard "kudos" section
KUDOS_SIZE = 3
