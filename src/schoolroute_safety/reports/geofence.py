"""Select hazard reports lying along a walking route."""

from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from pyproj import CRS, Transformer
from shapely.geometry import LineString, Point, Polygon
from shapely.ops import transform

from .models import DangerReport
from ..safety.models import RouteSegment

WGS84 = "EPSG:4326"


def _local_projection(origin_lon: float, origin_lat: float):
    """
    Transformers between WGS84 and an azimuthal equidistant projection
    centred on the route, in meters.
    """
    local = CRS.from_proj4(
        f"+proj=aeqd +lat_0={origin_lat} +lon_0={origin_lon} "
        "+datum=WGS84 +units=m"
    )
    forward = Transformer.from_crs(WGS84, local, always_xy=True)
    inverse = Transformer.from_crs(local, WGS84, always_xy=True)
    return forward.transform, inverse.transform


def route_buffer(
    route: Sequence[Tuple[float, float]],
    buffer_m: float = 50
) -> Polygon:
    """
    Build the polygon within buffer_m meters of a route.

    Args:
        route: Route as (lon, lat) tuples
        buffer_m: Buffer distance in meters

    Returns:
        Shapely polygon in lon/lat coordinates

    Raises:
        ValueError: If the route is empty or the buffer is not positive
    """
    if not route:
        raise ValueError("Cannot buffer an empty route")
    if buffer_m <= 0:
        raise ValueError(f"Buffer distance must be positive: {buffer_m}")

    mean_lon = sum(p[0] for p in route) / len(route)
    mean_lat = sum(p[1] for p in route) / len(route)
    forward, inverse = _local_projection(mean_lon, mean_lat)

    geometry = LineString(route) if len(route) > 1 else Point(route[0])
    buffered = transform(forward, geometry).buffer(buffer_m)
    return transform(inverse, buffered)


def hazards_near_route(
    route: Sequence[Tuple[float, float]],
    reports: Iterable[DangerReport],
    buffer_m: float = 50
) -> List[DangerReport]:
    """Reports located inside (or on the edge of) the route buffer, in input order."""
    area = route_buffer(route, buffer_m)
    return [
        report for report in reports
        if area.covers(Point(report.longitude, report.latitude))
    ]


def attach_reports_to_segments(
    segments: Sequence[RouteSegment],
    reports: Iterable[DangerReport],
    buffer_m: float = 50
) -> List[RouteSegment]:
    """
    Attach nearby hazard reports to each route segment.

    A report near two adjacent segments is attached to both. Input
    segments are left untouched; new segment objects are returned.

    Args:
        segments: Route segments with coordinates
        reports: Candidate hazard reports
        buffer_m: Distance in meters within which a report counts

    Returns:
        List of segments with their danger_reports extended
    """
    reports = list(reports)
    result = []

    for segment in segments:
        if not segment.coordinates:
            result.append(replace(segment))
            continue

        nearby = hazards_near_route(segment.coordinates, reports, buffer_m)
        result.append(replace(
            segment,
            danger_reports=list(segment.danger_reports)
            + [r.to_segment_report() for r in nearby],
        ))

    return result
