"""
Read-only resource endpoints: a satellite summary, satellites by category
and satellites above a location.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from satellite_tracking.api.dependencies import get_n2yo_service
from satellite_tracking.exceptions import ExternalAPIError, NotFoundError, ValidationError
from satellite_tracking.schemas.satellite import AboveParams, PositionParams
from satellite_tracking.services.n2yo_service import N2YOService
from satellite_tracking.utils.satellite_utils import (
    CATEGORY_MAPPING,
    MAX_CATEGORY_ID,
    category_name,
    epoch_to_iso,
    format_satellite_data,
    split_tle,
    utc_now_iso,
    validate_coordinates,
    validate_norad_id
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])


@router.get("/satellite/{norad_id}", summary="Satellite information")
async def get_satellite_resource(norad_id: int, n2yo: N2YOService = Depends(get_n2yo_service)):
    """
    Combine TLE and current position of a satellite.

    Both lookups run concurrently and may fail independently; the position is
    computed for an observer at the equator. The request only fails when
    neither lookup produced data.
    """
    if not validate_norad_id(norad_id):
        raise ValidationError("Invalid NORAD ID. Must be a positive integer.", field="norad_id")

    tle_result, positions_result = await asyncio.gather(
        n2yo.get_tle(norad_id),
        n2yo.get_positions(PositionParams(norad_id=norad_id, observer_lat=0, observer_lng=0, seconds=1)),
        return_exceptions=True
    )

    for result in (tle_result, positions_result):
        if isinstance(result, BaseException) and not isinstance(result, ExternalAPIError):
            raise result

    if isinstance(tle_result, ExternalAPIError) and isinstance(positions_result, ExternalAPIError):
        raise tle_result

    tle = None
    if isinstance(tle_result, ExternalAPIError):
        logger.warning(f"TLE lookup failed for satellite {norad_id}: {tle_result.message}")
    elif tle_result.tle:
        tle = tle_result

    positions = []
    if isinstance(positions_result, ExternalAPIError):
        logger.warning(f"Position lookup failed for satellite {norad_id}: {positions_result.message}")
    else:
        positions = positions_result

    if tle is None and not positions:
        # a failed lookup outranks an empty one
        if isinstance(tle_result, ExternalAPIError):
            raise tle_result
        if isinstance(positions_result, ExternalAPIError):
            raise positions_result
        raise NotFoundError(
            f"No data found for satellite with NORAD ID: {norad_id}",
            resource_type="satellite",
            resource_id=str(norad_id)
        )

    if tle is not None:
        name = tle.satname
    else:
        name = positions[0].satname

    satellite = {"norad_id": norad_id, "name": name}

    if tle is not None:
        satellite["tle"] = split_tle(tle)

    if positions:
        position = positions[0]
        satellite["position"] = {
            "timestamp": epoch_to_iso(position.timestamp),
            "latitude": position.satlatitude,
            "longitude": position.satlongitude,
            "altitude": position.sataltitude,
            "eclipsed": position.eclipsed,
        }

    satellite["updated"] = utc_now_iso()
    return satellite


@router.get("/satellites/category/{category_id}", summary="Satellites by category")
async def get_satellites_category_resource(category_id: int, n2yo: N2YOService = Depends(get_n2yo_service)):
    if category_id < 0 or category_id > MAX_CATEGORY_ID:
        raise ValidationError(
            f"Invalid category ID. Must be an integer between 0 and {MAX_CATEGORY_ID}.",
            field="category_id"
        )

    satellites = await n2yo.search_satellites("", category_id)

    response = {
        "category_id": category_id,
        "category_name": category_name(category_id),
        "satellites": [format_satellite_data(sat) for sat in satellites],
        "count": len(satellites),
        "timestamp": utc_now_iso(),
    }
    if not satellites:
        response["message"] = f"No satellites found in category: {CATEGORY_MAPPING[category_id]}"
    return response


@router.get("/satellites/above/{lat}/{lng}/{radius}", summary="Satellites above a location")
async def get_satellites_above_resource(
    lat: float,
    lng: float,
    radius: float,
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    is_valid, error_msg = validate_coordinates(lat, lng)
    if not is_valid:
        raise ValidationError(error_msg, field="coordinates")

    if radius < 0 or radius > 90:
        raise ValidationError("Invalid radius. Must be a number between 0 and 90 degrees.", field="radius")

    satellites = await n2yo.get_above(AboveParams(
        observer_lat=lat,
        observer_lng=lng,
        search_radius=radius,
        category_id=0
    ))

    response = {
        "location": {"latitude": lat, "longitude": lng},
        "radius": radius,
        "satellites": [format_satellite_data(sat) for sat in satellites],
        "count": len(satellites),
        "timestamp": utc_now_iso(),
    }
    if not satellites:
        response["message"] = "No satellites found above the specified location."
    return response
