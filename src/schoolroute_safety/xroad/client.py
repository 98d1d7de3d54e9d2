"""Client for the JARTIC open traffic (xROAD) WFS geoserver."""

import re
from datetime import datetime
from math import cos, radians
from typing import Dict, Optional, Tuple

import requests

DEFAULT_BASE_URL = "https://api.jartic-open-traffic.org/geoserver"

# Feature types served by the geoserver
ROAD_MEASURE_5MIN = "t_travospublic_measure_5m"
TRAFFIC_5MIN = "jartic:traffic_5min_fix"
TRAFFIC_60MIN = "jartic:traffic_60min_fix"

# Road type codes (1: expressway, 3: national road, ...)
DEFAULT_ROAD_TYPE = "3"

DATE_TIME_PATTERN = re.compile(r"^\d{12}$")


class XRoadAPIError(Exception):
    """Error returned by (or while reaching) the traffic API."""

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        return f"{self.args[0]} (status: {self.status})"


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_date_time(moment: datetime) -> str:
    """Format a datetime as YYYYMMDDHHMM."""
    return moment.strftime("%Y%m%d%H%M")


def validate_date_time(date_time: str):
    """Raise ValueError unless date_time is a 12-digit YYYYMMDDHHMM string."""
    if not isinstance(date_time, str) or not DATE_TIME_PATTERN.match(date_time):
        raise ValueError(
            f"Invalid date-time: {date_time!r}. Use YYYYMMDDHHMM format."
        )


def time_code(date_time: str) -> str:
    """
    Convert YYYYMMDDHHMM into the API time code.

    Measurements are published every 5 minutes, so minutes are floored
    to a multiple of 5 (e.g. 202405010817 -> 202405010815).
    """
    validate_date_time(date_time)
    minute = int(date_time[10:12]) // 5 * 5
    return f"{date_time[:10]}{minute:02d}"


def bbox_around(
    latitude: float,
    longitude: float,
    radius_m: float
) -> Tuple[float, float, float, float]:
    """
    Square bounding box around a point.

    Returns:
        (min_lon, min_lat, max_lon, max_lat)
    """
    lat_offset = radius_m / 111000
    lon_offset = radius_m / (111000 * cos(radians(latitude)))
    return (
        longitude - lon_offset,
        latitude - lat_offset,
        longitude + lon_offset,
        latitude + lat_offset,
    )


def describe_error(error: Exception) -> str:
    """Turn a traffic API failure into a message for end users."""
    if isinstance(error, XRoadAPIError):
        if error.status == 0:
            return (
                "Could not connect to the traffic API. Check your network "
                "connection or try again later."
            )
        if error.status == 400:
            return "The traffic API rejected the request. Check the parameters."
        if error.status in (401, 403):
            return "Access to the traffic API was denied. Check the API key."
        if error.status == 500:
            return "The traffic API had an internal error. Try again later."
        if error.status > 500:
            return (
                f"The traffic API is unavailable (status: {error.status}). "
                "Try again later."
            )
        return f"Traffic API error (status: {error.status}): {error.args[0]}"
    return f"Unexpected error while fetching traffic data: {error}"


class XRoadClient:
    """Fetch traffic volume and road measurement data."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize client.

        Args:
            base_url: Geoserver endpoint
            timeout: Request timeout in seconds
            session: Optional requests session (a new one is created if None)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, params: Dict[str, str]) -> dict:
        """
        Run a GET request against the geoserver.

        Args:
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            XRoadAPIError: On HTTP errors, network failures or non-JSON bodies
        """
        try:
            response = self.session.get(
                self.base_url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise XRoadAPIError(f"Failed to reach traffic API: {e}", 0)

        if not response.ok:
            print(f"⚠️  Traffic API responded {response.status_code}: "
                  f"{response.text[:200]}")
            raise XRoadAPIError(
                f"Traffic API error: {response.reason}",
                response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise XRoadAPIError(
                f"Traffic API returned invalid JSON: {e}",
                response.status_code,
            )

    def _wfs_params(self, **extra) -> Dict[str, str]:
        params = {
            "service": "WFS",
            "version": "2.0.0",
            "request": "GetFeature",
            "outputFormat": "application/json",
        }
        params.update(extra)
        return params

    def get_road_data(
        self,
        latitude: float,
        longitude: float,
        radius: float = 1000,
        date_time: Optional[str] = None,
        road_type: str = DEFAULT_ROAD_TYPE
    ) -> dict:
        """
        Get 5-minute traffic measurements on roads around a point.

        Args:
            latitude: Latitude of the search center
            longitude: Longitude of the search center
            radius: Search radius in meters
            date_time: YYYYMMDDHHMM (defaults to now)
            road_type: Road type code (3: national road)

        Returns:
            GeoJSON FeatureCollection from the API

        Raises:
            ValueError: If coordinates or date_time are invalid
            XRoadAPIError: If the request fails
        """
        if not (_is_number(latitude) and _is_number(longitude)):
            raise ValueError("Latitude and longitude must be numbers")
        if abs(latitude) > 90 or abs(longitude) > 180:
            raise ValueError(
                f"Coordinates out of range: latitude={latitude}, longitude={longitude}"
            )
        if date_time is None:
            date_time = format_date_time(datetime.now())

        code = time_code(date_time)
        min_lon, min_lat, max_lon, max_lat = bbox_around(latitude, longitude, radius)

        cql_filter = (
            f'"道路種別"={road_type} AND "時間コード"={code} AND '
            f"BBOX(\"ジオメトリ\",{min_lon},{min_lat},{max_lon},{max_lat},'EPSG:4326')"
        )

        print(f"📥 Requesting road data around ({latitude:.4f}, {longitude:.4f}), "
              f"radius {radius}m, time code {code}")

        return self.fetch(self._wfs_params(
            typeNames=ROAD_MEASURE_5MIN,
            srsName="EPSG:4326",
            exceptions="application/json",
            cql_filter=cql_filter,
        ))

    def _traffic_params(self, start: str, end: str, hourly: bool, **selector):
        validate_date_time(start)
        validate_date_time(end)

        if hourly:
            params = self._wfs_params(
                typeName=TRAFFIC_60MIN,
                YYYYMMDDHH_FROM=start[:10],
                YYYYMMDDHH_TO=end[:10],
            )
        else:
            params = self._wfs_params(
                typeName=TRAFFIC_5MIN,
                YYYYMMDDHHMM_FROM=start,
                YYYYMMDDHHMM_TO=end,
            )
        params.update(selector)
        return params

    def get_traffic_data(
        self,
        observation_codes: str,
        start: str,
        end: str,
        hourly: bool = False
    ) -> dict:
        """
        Get traffic volumes for observation points.

        Args:
            observation_codes: Comma-separated observation point codes
            start: Start of the period (YYYYMMDDHHMM)
            end: End of the period (YYYYMMDDHHMM)
            hourly: Use hourly values instead of 5-minute values

        Returns:
            Decoded JSON response
        """
        return self.fetch(self._traffic_params(
            start, end, hourly, MSTRKCODE=observation_codes
        ))

    def get_traffic_data_by_place(
        self,
        place_name: str,
        start: str,
        end: str,
        hourly: bool = False
    ) -> dict:
        """Get traffic volumes by place name (route, section or prefecture)."""
        return self.fetch(self._traffic_params(
            start, end, hourly, PLACE_NAME=place_name
        ))

    def get_traffic_data_by_mesh_code(
        self,
        mesh_codes: str,
        start: str,
        end: str,
        hourly: bool = False
    ) -> dict:
        """Get traffic volumes for comma-separated mesh codes."""
        return self.fetch(self._traffic_params(
            start, end, hourly, MESHCODE=mesh_codes
        ))
