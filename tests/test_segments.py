import json

import pytest

from schoolroute_safety.core import load_gpx_route
from schoolroute_safety.safety import RoadType, load_segments, split_route

from conftest import write_gpx


def line(n, step=0.001):
    """n points heading east from central Tokyo, about 90 m apart."""
    return [(139.760 + i * step, 35.680) for i in range(n)]


class TestLoadSegments:

    def test_json_list(self, tmp_path, footway_segment):
        path = tmp_path / "segments.json"
        path.write_text(json.dumps([footway_segment.to_dict()]), encoding="utf-8")
        assert load_segments(str(path)) == [footway_segment]

    def test_segments_object(self, tmp_path):
        path = tmp_path / "segments.json"
        path.write_text(json.dumps({"segments": [{"id": "a"}, {"id": "b"}]}),
                        encoding="utf-8")
        assert [s.id for s in load_segments(str(path))] == ["a", "b"]

    def test_geojson_feature_collection(self, tmp_path):
        collection = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "id": "north",
                    "geometry": {
                        "type": "LineString",
                        "coordinates": [[139.76, 35.68], [139.76, 35.681]],
                    },
                    "properties": {"roadType": "residential", "trafficVolume": 120},
                },
                {
                    "type": "Feature",
                    "geometry": {
                        "type": "LineString",
                        "coordinates": [[139.76, 35.681], [139.761, 35.681]],
                    },
                    "properties": {},
                },
            ],
        }
        path = tmp_path / "segments.geojson"
        path.write_text(json.dumps(collection), encoding="utf-8")

        first, second = load_segments(str(path))
        assert first.id == "north"
        assert first.road_type is RoadType.RESIDENTIAL
        assert first.traffic_volume == 120
        assert first.coordinates == [(139.76, 35.68), (139.76, 35.681)]
        assert second.id == "seg-2"

    def test_geojson_rejects_points(self, tmp_path):
        collection = {
            "type": "FeatureCollection",
            "features": [{"type": "Feature",
                          "geometry": {"type": "Point", "coordinates": [0, 0]},
                          "properties": {}}],
        }
        path = tmp_path / "points.geojson"
        path.write_text(json.dumps(collection), encoding="utf-8")
        with pytest.raises(ValueError):
            load_segments(str(path))

    def test_unknown_layout(self, tmp_path):
        path = tmp_path / "weird.json"
        path.write_text(json.dumps({"route": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_segments(str(path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            load_segments(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_segments(str(tmp_path / "none.json"))


class TestSplitRoute:

    def test_segments_share_boundary_points(self):
        points = line(8)
        segments = split_route(points, segment_length_m=200)

        assert [s.id for s in segments] == ["seg-1", "seg-2", "seg-3"]
        assert segments[0].coordinates == points[0:4]
        assert segments[1].coordinates == points[3:7]
        assert segments[2].coordinates == points[6:8]

    def test_no_dangling_single_point(self):
        segments = split_route(line(7), segment_length_m=200)
        assert len(segments) == 2
        assert all(len(s.coordinates) >= 2 for s in segments)

    def test_short_route_is_one_segment(self):
        segments = split_route(line(3), segment_length_m=1000)
        assert len(segments) == 1
        assert segments[0].coordinates == line(3)

    def test_invalid_input(self):
        with pytest.raises(ValueError):
            split_route(line(1))
        with pytest.raises(ValueError):
            split_route(line(3), segment_length_m=0)


def test_load_gpx_route_returns_lon_lat(tmp_path):
    path = write_gpx(tmp_path / "route.gpx", line(3))
    assert load_gpx_route(str(path)) == line(3)


def feature_collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def line_feature(coordinates, **extra):
    feature = {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": coordinates},
        "properties": {},
    }
    feature.update(extra)
    return feature


def test_geojson_with_altitude(tmp_path):
    path = tmp_path / "segments.geojson"
    path.write_text(json.dumps(feature_collection(
        line_feature([[139.76, 35.68, 12.0], [139.765, 35.68, 13.5]]),
    )), encoding="utf-8")

    (segment,) = load_segments(str(path))
    assert segment.coordinates == [(139.76, 35.68), (139.765, 35.68)]


def test_geojson_position_needs_two_values(tmp_path):
    path = tmp_path / "segments.geojson"
    path.write_text(json.dumps(feature_collection(
        line_feature([[139.76], [139.765, 35.68]]),
    )), encoding="utf-8")
    with pytest.raises(ValueError, match="longitude and latitude"):
        load_segments(str(path))


def test_geojson_feature_id_zero_is_kept(tmp_path):
    path = tmp_path / "segments.geojson"
    path.write_text(json.dumps(feature_collection(
        line_feature([[139.76, 35.68], [139.765, 35.68]], id=0),
        line_feature([[139.765, 35.68], [139.77, 35.68]]),
    )), encoding="utf-8")
    assert [s.id for s in load_segments(str(path))] == ["0", "seg-2"]
