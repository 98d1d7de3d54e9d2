"""Assemble route segments from files and raw route geometry."""

import json
from pathlib import Path
from typing import List, Sequence, Tuple

from .models import RouteSegment
from ..core.utils import haversine_distance


def load_segments(path: str) -> List[RouteSegment]:
    """
    Load route segments from a JSON or GeoJSON file.

    Accepted layouts:
        - a JSON list of segment objects
        - an object with a "segments" list
        - a GeoJSON FeatureCollection of LineStrings, segment attributes
          in each feature's properties

    Args:
        path: Path to the segments file

    Returns:
        List of RouteSegment in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file layout is not recognised
    """
    segments_file = Path(path)
    if not segments_file.exists():
        raise FileNotFoundError(f"Segments file not found: {path}")

    with open(segments_file, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in segments file: {e}")

    if isinstance(data, list):
        return [RouteSegment.from_dict(item) for item in data]

    if isinstance(data, dict) and data.get("type") == "FeatureCollection":
        return [
            _segment_from_feature(feature, index)
            for index, feature in enumerate(data.get("features", []), start=1)
        ]

    if isinstance(data, dict) and isinstance(data.get("segments"), list):
        return [RouteSegment.from_dict(item) for item in data["segments"]]

    raise ValueError(
        f"Unrecognised segments file layout: {path}. "
        "Expected a list, a {'segments': [...]} object or a FeatureCollection."
    )


def _segment_from_feature(feature: dict, index: int) -> RouteSegment:
    """Convert one GeoJSON LineString feature into a RouteSegment."""
    geometry = feature.get("geometry") or {}
    if geometry.get("type") != "LineString":
        raise ValueError(
            f"Feature {index} is a {geometry.get('type')}, expected LineString"
        )

    data = dict(feature.get("properties") or {})
    feature_id = feature.get("id")
    if data.get("id") is None:
        data["id"] = f"seg-{index}" if feature_id is None else feature_id
    data["coordinates"] = geometry.get("coordinates", [])
    return RouteSegment.from_dict(data)


def split_route(
    points: Sequence[Tuple[float, float]],
    segment_length_m: float = 200
) -> List[RouteSegment]:
    """
    Cut a walking route into consecutive segments of roughly equal length.

    A segment is closed at the first point where its length reaches
    segment_length_m; the next segment starts at that same point. The last
    segment takes whatever remains.

    Args:
        points: Route as (lon, lat) tuples
        segment_length_m: Target segment length in meters

    Returns:
        List of RouteSegment with ids seg-1, seg-2, ...

    Raises:
        ValueError: If the route has fewer than two points or the length
            is not positive
    """
    if len(points) < 2:
        raise ValueError("A route needs at least two points to be segmented")
    if segment_length_m <= 0:
        raise ValueError(f"Segment length must be positive: {segment_length_m}")

    segments = []
    current = [tuple(points[0])]
    length = 0.0

    for prev, point in zip(points, points[1:]):
        length += haversine_distance(prev[1], prev[0], point[1], point[0])
        current.append(tuple(point))

        if length >= segment_length_m:
            segments.append(RouteSegment(
                id=f"seg-{len(segments) + 1}",
                coordinates=current
            ))
            current = [tuple(point)]
            length = 0.0

    if len(current) >= 2:
        segments.append(RouteSegment(
            id=f"seg-{len(segments) + 1}",
            coordinates=current
        ))

    return segments
