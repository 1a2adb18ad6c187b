"""
API endpoints for satellite tracking tools: TLE, positions, passes,
satellites above a location and search.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Path, Query

from satellite_tracking.api.dependencies import get_n2yo_service
from satellite_tracking.exceptions import NotFoundError, ValidationError
from satellite_tracking.schemas.satellite import (
    AboveParams,
    PositionParams,
    RadioPassesParams,
    VisualPassesParams
)
from satellite_tracking.services.n2yo_service import (
    DEFAULT_PASS_DAYS,
    DEFAULT_SEARCH_RADIUS,
    N2YOService
)
from satellite_tracking.utils.satellite_utils import (
    MAX_CATEGORY_ID,
    category_name,
    format_observer,
    format_pass_data,
    format_position_data,
    format_satellite_data,
    list_categories,
    split_tle,
    utc_now_iso
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/satellites", tags=["satellites"])


def _search_response(query: Optional[str], category_id: Optional[int], satellites) -> Dict[str, Any]:
    response = {
        "query": query or None,
        "category": category_name(category_id) if category_id is not None else None,
        "satellites": [format_satellite_data(sat) for sat in satellites],
        "count": len(satellites),
    }
    if satellites:
        response["timestamp"] = utc_now_iso()
    elif query:
        response["message"] = "No satellites found matching the search criteria."
    else:
        response["message"] = f"No satellites found in category: {category_name(category_id)}."
    return response


@router.get(
    "/categories",
    summary="List satellite categories",
    description="Category ids accepted by the above and search endpoints."
)
async def get_categories():
    return {"categories": list_categories()}


@router.get(
    "/above",
    summary="Satellites above a location",
    description="List satellites currently within the search radius of the observer's zenith."
)
async def get_satellites_above(
    observer_lat: float = Query(..., ge=-90, le=90, description="Observer latitude"),
    observer_lng: float = Query(..., ge=-180, le=180, description="Observer longitude"),
    observer_alt: Optional[float] = Query(None, ge=0, description="Observer altitude in meters"),
    search_radius: Optional[float] = Query(None, ge=0, le=90, description="Search radius in degrees"),
    category_id: Optional[int] = Query(None, ge=0, le=MAX_CATEGORY_ID, description="Category ID, 0 for all"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    satellites = await n2yo.get_above(AboveParams(
        observer_lat=observer_lat,
        observer_lng=observer_lng,
        observer_alt=observer_alt,
        search_radius=search_radius,
        category_id=category_id
    ))

    response = {
        "observer": format_observer(observer_lat, observer_lng, observer_alt),
        "search_radius": search_radius if search_radius is not None else DEFAULT_SEARCH_RADIUS,
        "category": category_name(category_id),
        "satellites": [format_satellite_data(sat) for sat in satellites],
        "count": len(satellites),
    }
    if satellites:
        response["timestamp"] = utc_now_iso()
    else:
        response["message"] = "No satellites found above the specified location."

    logger.info(f"Found {len(satellites)} satellites above ({observer_lat}, {observer_lng})")
    return response


@router.get(
    "/search",
    summary="Search satellites by name or category",
    description="Either query or category_id must be given. N2YO has no search endpoint, so results are "
                "limited to satellites currently above the equator."
)
async def search_satellites(
    query: Optional[str] = Query(None, max_length=100, description="Name or international designator"),
    category_id: Optional[int] = Query(None, ge=0, le=MAX_CATEGORY_ID, description="Category ID"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    if not query and category_id is None:
        raise ValidationError("Either query or category_id must be provided.", field="query")

    satellites = await n2yo.search_satellites(query or "", category_id)
    logger.info(f"Search for '{query}' in category {category_id} returned {len(satellites)} satellites")
    return _search_response(query, category_id, satellites)


@router.get("/search/name", summary="Search satellites by name")
async def search_satellites_by_name(
    query: str = Query(..., min_length=1, max_length=100, description="Name or international designator"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    satellites = await n2yo.search_satellites(query, None)
    return _search_response(query, None, satellites)


@router.get("/search/category/{category_id}", summary="Search satellites by category")
async def search_satellites_by_category(
    category_id: int = Path(..., ge=0, le=MAX_CATEGORY_ID, description="Category ID"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    satellites = await n2yo.search_satellites("", category_id)
    return _search_response(None, category_id, satellites)


@router.get(
    "/{norad_id}/tle",
    summary="Get satellite TLE",
    description="Two-line element set of a satellite, split into lines."
)
async def get_satellite_tle(
    norad_id: int = Path(..., gt=0, description="NORAD catalog number"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    tle = await n2yo.get_tle(norad_id)

    if not tle.tle:
        raise NotFoundError(
            f"No TLE data found for satellite with NORAD ID: {norad_id}",
            resource_type="tle",
            resource_id=str(norad_id)
        )

    return {
        "satellite_id": norad_id,
        "satellite_name": tle.satname,
        "tle": split_tle(tle),
        "updated": utc_now_iso(),
    }


@router.get(
    "/{norad_id}/positions",
    summary="Get satellite positions",
    description="Satellite positions for the next N seconds, as seen from the observer."
)
async def get_satellite_positions(
    norad_id: int = Path(..., gt=0, description="NORAD catalog number"),
    observer_lat: float = Query(..., ge=-90, le=90, description="Observer latitude"),
    observer_lng: float = Query(..., ge=-180, le=180, description="Observer longitude"),
    observer_alt: Optional[float] = Query(None, ge=0, description="Observer altitude in meters"),
    seconds: Optional[int] = Query(None, ge=1, le=300, description="Number of positions, one per second"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    positions = await n2yo.get_positions(PositionParams(
        norad_id=norad_id,
        observer_lat=observer_lat,
        observer_lng=observer_lng,
        observer_alt=observer_alt,
        seconds=seconds
    ))

    if not positions:
        raise NotFoundError(
            f"No position data found for satellite with NORAD ID: {norad_id}",
            resource_type="positions",
            resource_id=str(norad_id)
        )

    return {
        "satellite_id": norad_id,
        "satellite_name": positions[0].satname,
        "observer": format_observer(observer_lat, observer_lng, observer_alt),
        "positions": [format_position_data(position) for position in positions],
    }


@router.get(
    "/{norad_id}/visual-passes",
    summary="Predict visual passes",
    description="Upcoming passes where the satellite is optically visible from the observer."
)
async def predict_visual_passes(
    norad_id: int = Path(..., gt=0, description="NORAD catalog number"),
    observer_lat: float = Query(..., ge=-90, le=90, description="Observer latitude"),
    observer_lng: float = Query(..., ge=-180, le=180, description="Observer longitude"),
    observer_alt: Optional[float] = Query(None, ge=0, description="Observer altitude in meters"),
    days: Optional[int] = Query(None, ge=1, le=10, description="Number of days to predict"),
    min_visibility: Optional[int] = Query(None, ge=0, le=600, description="Minimum visible time in seconds"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    passes = await n2yo.get_visual_passes(VisualPassesParams(
        norad_id=norad_id,
        observer_lat=observer_lat,
        observer_lng=observer_lng,
        observer_alt=observer_alt,
        days=days,
        min_visibility=min_visibility
    ))
    return _passes_response(norad_id, observer_lat, observer_lng, observer_alt, days, passes, "visible")


@router.get(
    "/{norad_id}/radio-passes",
    summary="Predict radio passes",
    description="Upcoming passes above a minimum elevation, regardless of optical visibility."
)
async def predict_radio_passes(
    norad_id: int = Path(..., gt=0, description="NORAD catalog number"),
    observer_lat: float = Query(..., ge=-90, le=90, description="Observer latitude"),
    observer_lng: float = Query(..., ge=-180, le=180, description="Observer longitude"),
    observer_alt: Optional[float] = Query(None, ge=0, description="Observer altitude in meters"),
    days: Optional[int] = Query(None, ge=1, le=10, description="Number of days to predict"),
    min_elevation: Optional[float] = Query(None, ge=0, le=90, description="Minimum elevation in degrees"),
    n2yo: N2YOService = Depends(get_n2yo_service)
):
    passes = await n2yo.get_radio_passes(RadioPassesParams(
        norad_id=norad_id,
        observer_lat=observer_lat,
        observer_lng=observer_lng,
        observer_alt=observer_alt,
        days=days,
        min_elevation=min_elevation
    ))
    return _passes_response(norad_id, observer_lat, observer_lng, observer_alt, days, passes, "radio")


def _passes_response(norad_id, observer_lat, observer_lng, observer_alt, days, passes, kind) -> Dict[str, Any]:
    prediction_days = days if days is not None else DEFAULT_PASS_DAYS
    response = {
        "satellite_id": norad_id,
        "observer": format_observer(observer_lat, observer_lng, observer_alt),
        "prediction_days": prediction_days,
        "passes": [format_pass_data(satellite_pass) for satellite_pass in passes],
    }
    if passes:
        response["satellite_name"] = passes[0].satname
    else:
        response["message"] = f"No {kind} passes found for satellite {norad_id} in the next {prediction_days} days."
    return response
