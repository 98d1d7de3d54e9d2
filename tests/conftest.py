import pytest

from schoolroute_safety.reports import DangerReport
from schoolroute_safety.safety import RouteSegment, ScoringCriteria

# Straight east-west route in central Tokyo, about 900 m long
ROUTE = [(139.760, 35.680), (139.765, 35.680), (139.770, 35.680)]

GPX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>school route</name>
    <trkseg>
{points}
    </trkseg>
  </trk>
</gpx>
"""


def make_report(report_id, lon, lat, danger_type="traffic", level=3, **kwargs):
    return DangerReport(
        id=report_id,
        user_id=kwargs.pop("user_id", "user-1"),
        title=kwargs.pop("title", f"hazard {report_id}"),
        latitude=lat,
        longitude=lon,
        danger_type=danger_type,
        danger_level=level,
        **kwargs,
    )


def write_gpx(path, points):
    body = "\n".join(
        f'      <trkpt lat="{lat}" lon="{lon}"></trkpt>' for lon, lat in points
    )
    path.write_text(GPX_TEMPLATE.format(points=body), encoding="utf-8")
    return path


@pytest.fixture
def criteria():
    return ScoringCriteria()


@pytest.fixture
def route():
    return list(ROUTE)


@pytest.fixture
def primary_segment():
    """Primary road, no volume, one traffic light."""
    return RouteSegment.from_dict({
        "id": "A",
        "coordinates": [[139.760, 35.680], [139.765, 35.680]],
        "roadType": "primary",
        "infrastructures": [{"type": "trafficLight"}],
    })


@pytest.fixture
def footway_segment():
    """Footway with light traffic, construction work and one traffic report."""
    return RouteSegment.from_dict({
        "id": "B",
        "coordinates": [[139.765, 35.680], [139.770, 35.680]],
        "roadType": "footway",
        "trafficVolume": 5,
        "restrictions": [{"type": "constructionWork"}],
        "dangerReports": [{"type": "traffic", "severity": "medium"}],
        "infrastructures": [],
    })


@pytest.fixture
def nearby_reports():
    return [
        # ~33 m north of the route
        make_report("near-traffic", 139.765, 35.6803, "traffic", level=4),
        # ~36 m past the east end, inside the rounded cap
        make_report("near-end", 139.7704, 35.680, "crime", level=5),
        # ~111 m north of the route
        make_report("far-north", 139.765, 35.681, "disaster", level=2),
        # ~108 m past the east end
        make_report("far-east", 139.7712, 35.680, "other", level=1),
    ]
