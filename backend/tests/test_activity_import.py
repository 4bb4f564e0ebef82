from datetime import datetime, timezone

import pytest

from fitgoals.services.activity_import import read_activity

GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><trkseg>
    <trkpt lat="40.0000" lon="-75.0000"><time>2025-04-05T11:00:00Z</time></trkpt>
    <trkpt lat="40.0072" lon="-75.0000"><time>2025-04-05T11:05:00Z</time></trkpt>
    <trkpt lat="40.0145" lon="-75.0000"><time>2025-04-05T11:10:00Z</time></trkpt>
  </trkseg></trk>
</gpx>
"""


def test_gpx_distance_and_start(tmp_path):
    path = tmp_path / "morning.gpx"
    path.write_text(GPX, encoding="utf-8")

    summary = read_activity(str(path))

    # 0.0145 degrees of latitude is about 1.61 km, i.e. one mile
    assert summary.distance_mi == pytest.approx(1.0, abs=0.02)
    assert summary.duration_seconds == 600
    assert summary.started_at == datetime(2025, 4, 5, 11, 0, tzinfo=timezone.utc)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    with pytest.raises(ValueError):
        read_activity(str(path))


def test_corrupt_gpx(tmp_path):
    path = tmp_path / "broken.gpx"
    path.write_text("<gpx><trk>", encoding="utf-8")
    with pytest.raises(ValueError):
        read_activity(str(path))
