"""Read run distance and start time out of GPX / FIT activity files."""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import gpxpy
from fitparse import FitFile

from fitgoals.core.constants import EARTH_RADIUS_M, MILE_M


@dataclass(frozen=True)
class ActivitySummary:
    started_at: Optional[datetime]
    distance_mi: float
    duration_seconds: int


def _haversine(lat1, lon1, lat2, lon2):
    """Return great-circle distance in meters between two WGS84 points.

    Uses the standard haversine formula; sufficient for per-point distances
    over a typical GPS activity track.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def gpx_summary(path: str) -> ActivitySummary:
    """Distance along all track points; start time from the first timestamp."""
    with open(path, "r", encoding="utf-8") as f:
        gpx = gpxpy.parse(f)

    first_time = None
    last_time = None
    total_m = 0.0
    prev = None

    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                if p.time and first_time is None:
                    first_time = p.time
                if p.time:
                    last_time = p.time
                if prev is not None:
                    total_m += _haversine(prev[0], prev[1], p.latitude, p.longitude)
                prev = (p.latitude, p.longitude)

    duration_seconds = int((last_time - first_time).total_seconds()) if first_time and last_time else 0
    return ActivitySummary(
        started_at=first_time,
        distance_mi=round(total_m / MILE_M, 2),
        duration_seconds=max(0, duration_seconds),
    )


def _semicircles_to_degrees(val):
    return val * (180 / 2**31) if val is not None else None


def fit_summary(path: str) -> ActivitySummary:
    """Prefer session totals (covers treadmill runs with no GPS), else sum records."""
    ff = FitFile(path)
    session_distance_m = None
    session_elapsed_s = None
    for session in ff.get_messages("session"):
        fields = {f.name: f.value for f in session}
        if fields.get("total_distance") is not None and session_distance_m is None:
            session_distance_m = float(fields.get("total_distance"))
        if fields.get("total_elapsed_time") is not None and session_elapsed_s is None:
            session_elapsed_s = int(fields.get("total_elapsed_time"))

    start_ts = None
    end_ts = None
    total_m = 0.0
    prev = None
    for record in ff.get_messages("record"):
        fields = {f.name: f.value for f in record}
        ts = fields.get("timestamp")
        lat = _semicircles_to_degrees(fields.get("position_lat"))
        lon = _semicircles_to_degrees(fields.get("position_long"))
        if ts and start_ts is None:
            start_ts = ts
        if ts:
            end_ts = ts
        if lat is not None and lon is not None:
            if prev is not None:
                total_m += _haversine(prev[0], prev[1], lat, lon)
            prev = (lat, lon)

    if session_distance_m is not None:
        total_m = session_distance_m
    if session_elapsed_s is not None:
        duration_seconds = session_elapsed_s
    elif start_ts and end_ts:
        duration_seconds = int((end_ts - start_ts).total_seconds())
    else:
        duration_seconds = 0

    # FIT timestamps are UTC without tzinfo
    if start_ts is not None and start_ts.tzinfo is None:
        start_ts = start_ts.replace(tzinfo=timezone.utc)

    return ActivitySummary(
        started_at=start_ts,
        distance_mi=round(total_m / MILE_M, 2),
        duration_seconds=max(0, duration_seconds),
    )


def read_activity(path: str) -> ActivitySummary:
    """Dispatch on extension. Raises ValueError for unsupported or unreadable files."""
    lower = path.lower()
    try:
        if lower.endswith(".gpx"):
            return gpx_summary(path)
        if lower.endswith(".fit"):
            return fit_summary(path)
    except Exception as e:  # gpxpy and fitparse raise a mix of their own and builtin errors
        raise ValueError(f"Invalid activity file: {e}") from e
    raise ValueError("Only .gpx or .fit files are supported")
