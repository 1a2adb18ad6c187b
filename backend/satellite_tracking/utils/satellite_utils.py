"""
Utility functions for satellite data formatting and validation.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from satellite_tracking.schemas.satellite import (
    PassPoint,
    SatelliteAbove,
    SatellitePass,
    SatellitePosition,
    SatelliteTLE
)

# N2YO satellite categories
CATEGORY_MAPPING: Dict[int, str] = {
    0: "All",
    1: "Amateur",
    2: "CubeSat",
    3: "Education",
    4: "Engineering",
    5: "Galileo",
    6: "GLO-OPS",
    7: "GPS-OPS",
    8: "Military",
    9: "Radar",
    10: "Resource",
    11: "SARSAT",
    12: "Science",
    13: "TDRSS",
    14: "Weather",
    15: "XM/Sirius",
    16: "Iridium-NEXT",
    17: "Globalstar",
    18: "Intelsat",
    19: "SES",
    20: "Telesat",
    21: "Orbcomm",
    22: "Gorizont",
    23: "Raduga",
    24: "Molniya",
    25: "DMC",
    26: "Argos",
    27: "Planet",
    28: "Spire",
    29: "Starlink",
    30: "OneWeb",
}

MAX_CATEGORY_ID = max(CATEGORY_MAPPING)


def validate_norad_id(norad_id: int) -> bool:
    """
    Validate NORAD ID format and range.

    Args:
        norad_id: NORAD catalog number

    Returns:
        True if valid, False otherwise
    """
    return isinstance(norad_id, int) and norad_id > 0


def validate_coordinates(latitude: float, longitude: float) -> Tuple[bool, Optional[str]]:
    """
    Validate geographic coordinates.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not (-90 <= latitude <= 90):
        return False, "Invalid latitude. Must be between -90 and 90."

    if not (-180 <= longitude <= 180):
        return False, "Invalid longitude. Must be between -180 and 180."

    return True, None


def category_name(category_id: Optional[int]) -> str:
    """Human readable name for a category id; None means all categories."""
    if category_id is None:
        return CATEGORY_MAPPING[0]
    return CATEGORY_MAPPING.get(category_id, f"Unknown ({category_id})")


def epoch_to_iso(epoch: int) -> str:
    """Convert Unix seconds to an ISO-8601 UTC string such as 2024-01-01T00:00:00.000Z."""
    moment = datetime.fromtimestamp(epoch, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def split_tle(tle: SatelliteTLE) -> Dict[str, str]:
    lines = tle.lines
    return {
        "line1": lines[0] if len(lines) > 0 else "",
        "line2": lines[1] if len(lines) > 1 else "",
        "line3": lines[2] if len(lines) > 2 else "",
    }


def format_observer(latitude: float, longitude: float, altitude: Optional[float]) -> Dict[str, float]:
    return {
        "latitude": latitude,
        "longitude": longitude,
        "altitude": altitude if altitude is not None else 0,
    }


def format_satellite_data(satellite: SatelliteAbove) -> Dict[str, Any]:
    return {
        "norad_id": satellite.satid,
        "name": satellite.satname,
        "international_designator": satellite.int_designator,
        "launch_date": satellite.launch_date,
        "position": {
            "latitude": satellite.satlat,
            "longitude": satellite.satlng,
            "altitude": satellite.satalt,
        },
    }


def format_position_data(position: SatellitePosition) -> Dict[str, Any]:
    return {
        "timestamp": epoch_to_iso(position.timestamp),
        "position": {
            "latitude": position.satlatitude,
            "longitude": position.satlongitude,
            "altitude": position.sataltitude,
        },
        "azimuth": position.azimuth,
        "elevation": position.elevation,
        "right_ascension": position.ra,
        "declination": position.dec,
        "eclipsed": position.eclipsed,
    }


def _format_pass_point(point: PassPoint) -> Dict[str, Any]:
    formatted = {
        "time": epoch_to_iso(point.utc),
        "azimuth": point.azimuth,
        "azimuth_compass": point.azimuth_compass,
    }
    # Radio passes only report the elevation at culmination
    if point.elevation is not None:
        formatted["elevation"] = point.elevation
    return formatted


def format_pass_data(satellite_pass: SatellitePass) -> Dict[str, Any]:
    """
    Format a pass with ISO timestamps.

    ``magnitude`` is only present for visual passes and ``duration_seconds``
    only when N2YO reports it.
    """
    formatted = {
        "start": _format_pass_point(satellite_pass.start),
        "max": _format_pass_point(satellite_pass.max),
        "end": _format_pass_point(satellite_pass.end),
    }
    if satellite_pass.magnitude is not None:
        formatted["magnitude"] = satellite_pass.magnitude
    if satellite_pass.duration is not None:
        formatted["duration_seconds"] = satellite_pass.duration
    return formatted


def list_categories() -> List[Dict[str, Any]]:
    return [{"id": category_id, "name": name} for category_id, name in CATEGORY_MAPPING.items()]
