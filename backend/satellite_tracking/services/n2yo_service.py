"""
N2YO API client service for satellite data retrieval.
Handles request construction, rate-limit retries, and response normalisation.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import httpx

from satellite_tracking.config import settings
from satellite_tracking.exceptions import (
    ConfigurationError,
    InvalidCredentialError,
    NetworkError,
    RateLimitExceededError,
    UpstreamError
)
from satellite_tracking.schemas.satellite import (
    AboveParams,
    PositionParams,
    RadioPassesParams,
    SatelliteAbove,
    SatellitePass,
    SatellitePosition,
    SatelliteTLE,
    VisualPassesParams
)

logger = logging.getLogger(__name__)


# N2YO API endpoints
TLE_ENDPOINT = "/tle"
POSITIONS_ENDPOINT = "/positions"
VISUAL_PASSES_ENDPOINT = "/visualpasses"
RADIO_PASSES_ENDPOINT = "/radiopasses"
ABOVE_ENDPOINT = "/above"

# Defaults applied when the caller leaves a parameter unset
DEFAULT_OBSERVER_ALT = 0
DEFAULT_POSITION_SECONDS = 60
DEFAULT_PASS_DAYS = 7
DEFAULT_MIN_VISIBILITY = 10
DEFAULT_MIN_ELEVATION = 0
DEFAULT_SEARCH_RADIUS = 90
ALL_CATEGORIES = 0


def _path_value(value: Any) -> str:
    """Render a path segment in fixed-point; integral floats lose their trailing '.0'."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def _unwrap_list(data: Dict[str, Any], field: str) -> List[Dict[str, Any]]:
    """Return the envelope's list field; absent or null means no results."""
    items = data.get(field)
    if items is None:
        return []
    return items


def _envelope_info(data: Dict[str, Any], norad_id: int) -> Tuple[int, str]:
    info = data.get("info")
    if info is None:
        info = {}
    satid = info.get("satid")
    if satid is None:
        satid = norad_id
    satname = info.get("satname")
    if not satname:
        satname = f"Satellite {norad_id}"
    return satid, satname


class N2YOService:
    """Service for interacting with the N2YO API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.n2yo_api_key
        if not self.api_key:
            raise ConfigurationError("N2YO API key is required", config_key="n2yo_api_key")

        self.base_url = (base_url or settings.n2yo_base_url).rstrip("/")
        self.timeout = _default(timeout, settings.n2yo_timeout)
        self.max_retries = _default(max_retries, settings.n2yo_max_retries)
        self.retry_delay = _default(retry_delay, settings.n2yo_retry_delay)
        self.client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self._transport)

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = self._new_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()
            self.client = None

    def _build_url(self, endpoint: str) -> str:
        # N2YO expects the key as a trailing path marker, not a query parameter
        return f"{self.base_url}{endpoint}/&apiKey={self.api_key}"

    async def _backoff(self, delay: float) -> None:
        await asyncio.sleep(delay)

    async def _make_request(self, endpoint: str) -> Dict[str, Any]:
        """
        Make a request to the N2YO API, retrying while rate limited.

        Args:
            endpoint: API endpoint path, e.g. ``/tle/25544``

        Returns:
            Decoded JSON envelope

        Raises:
            RateLimitExceededError: Still rate limited after all retries
            InvalidCredentialError: The API key was rejected
            UpstreamError: Any other unsuccessful response
            NetworkError: No response was received
        """
        if self.client is not None:
            return await self._request_with_retry(self.client, endpoint)

        async with self._new_client() as client:
            return await self._request_with_retry(client, endpoint)

    async def _request_with_retry(self, client: httpx.AsyncClient, endpoint: str) -> Dict[str, Any]:
        url = self._build_url(endpoint)
        attempts = self.max_retries + 1

        for attempt in range(attempts):
            logger.debug(f"N2YO request to {endpoint} (attempt {attempt + 1}/{attempts})")

            try:
                response = await client.get(url)
            except httpx.RequestError as e:
                logger.debug(f"N2YO request to {endpoint} failed: {type(e).__name__}")
                raise NetworkError() from e

            if response.status_code == 429:
                if attempt < self.max_retries:
                    delay = self.retry_delay * (2 ** attempt)
                    logger.debug(f"N2YO rate limit hit for {endpoint}, retrying in {delay:.1f}s")
                    await self._backoff(delay)
                    continue
                raise RateLimitExceededError(attempts=attempts)

            if response.status_code == 401:
                raise InvalidCredentialError()

            if not response.is_success:
                raise UpstreamError(response.status_code, response.text)

            try:
                data = response.json()
            except ValueError as e:
                raise UpstreamError(response.status_code, response.text) from e

            if not isinstance(data, dict):
                raise UpstreamError(response.status_code, response.text)

            self._check_error_payload(data, response.status_code)
            return data

        raise RateLimitExceededError(attempts=attempts)

    def _check_error_payload(self, data: Dict[str, Any], status_code: int) -> None:
        """N2YO reports some failures, such as an unknown key, in a 200 body."""
        if "error" not in data:
            return

        message = str(data["error"])
        if "api key" in message.lower():
            raise InvalidCredentialError(f"Invalid N2YO API key: {message}")
        raise UpstreamError(status_code, message, message=f"N2YO API returned error: {message}")

    async def get_tle(self, norad_id: int) -> SatelliteTLE:
        """
        Get the two-line element set for a satellite.

        Args:
            norad_id: NORAD ID of the satellite

        Returns:
            TLE record; name and transaction count are defaulted when missing
        """
        data = await self._make_request(f"{TLE_ENDPOINT}/{norad_id}")
        return SatelliteTLE.from_api(norad_id, data)

    async def get_positions(self, params: PositionParams) -> List[SatellitePosition]:
        """
        Get satellite positions for the next ``seconds`` seconds.

        Args:
            params: Satellite and observer; altitude defaults to 0 m and
                seconds to 60 when unset

        Returns:
            One position per second, in upstream order
        """
        alt = _default(params.observer_alt, DEFAULT_OBSERVER_ALT)
        seconds = _default(params.seconds, DEFAULT_POSITION_SECONDS)

        endpoint = "/".join([
            POSITIONS_ENDPOINT,
            _path_value(params.norad_id),
            _path_value(params.observer_lat),
            _path_value(params.observer_lng),
            _path_value(alt),
            _path_value(seconds)
        ])
        data = await self._make_request(endpoint)

        satid, satname = _envelope_info(data, params.norad_id)
        return [SatellitePosition.from_api(satid, satname, item) for item in _unwrap_list(data, "positions")]

    async def get_visual_passes(self, params: VisualPassesParams) -> List[SatellitePass]:
        """
        Get upcoming optically visible passes of a satellite over a location.

        Args:
            params: Satellite and observer; altitude defaults to 0 m, days to 7
                and minimum visibility to 10 seconds when unset

        Returns:
            Passes in chronological order as reported by N2YO
        """
        alt = _default(params.observer_alt, DEFAULT_OBSERVER_ALT)
        days = _default(params.days, DEFAULT_PASS_DAYS)
        min_visibility = _default(params.min_visibility, DEFAULT_MIN_VISIBILITY)

        endpoint = "/".join([
            VISUAL_PASSES_ENDPOINT,
            _path_value(params.norad_id),
            _path_value(params.observer_lat),
            _path_value(params.observer_lng),
            _path_value(alt),
            _path_value(days),
            _path_value(min_visibility)
        ])
        data = await self._make_request(endpoint)

        satid, satname = _envelope_info(data, params.norad_id)
        return [SatellitePass.from_api(satid, satname, item) for item in _unwrap_list(data, "passes")]

    async def get_radio_passes(self, params: RadioPassesParams) -> List[SatellitePass]:
        """
        Get upcoming radio passes (above a minimum elevation) over a location.

        Args:
            params: Satellite and observer; altitude defaults to 0 m, days to 7
                and minimum elevation to 0 degrees when unset

        Returns:
            Passes in chronological order as reported by N2YO
        """
        alt = _default(params.observer_alt, DEFAULT_OBSERVER_ALT)
        days = _default(params.days, DEFAULT_PASS_DAYS)
        min_elevation = _default(params.min_elevation, DEFAULT_MIN_ELEVATION)

        endpoint = "/".join([
            RADIO_PASSES_ENDPOINT,
            _path_value(params.norad_id),
            _path_value(params.observer_lat),
            _path_value(params.observer_lng),
            _path_value(alt),
            _path_value(days),
            _path_value(min_elevation)
        ])
        data = await self._make_request(endpoint)

        satid, satname = _envelope_info(data, params.norad_id)
        return [SatellitePass.from_api(satid, satname, item) for item in _unwrap_list(data, "passes")]

    async def get_above(self, params: AboveParams) -> List[SatelliteAbove]:
        """
        Get all satellites within a search radius of the observer's zenith.

        Args:
            params: Observer location; altitude defaults to 0 m, radius to 90
                degrees and category to 0 (all) when unset

        Returns:
            Satellites currently above the location
        """
        alt = _default(params.observer_alt, DEFAULT_OBSERVER_ALT)
        radius = _default(params.search_radius, DEFAULT_SEARCH_RADIUS)
        category_id = _default(params.category_id, ALL_CATEGORIES)

        endpoint = "/".join([
            ABOVE_ENDPOINT,
            _path_value(params.observer_lat),
            _path_value(params.observer_lng),
            _path_value(alt),
            _path_value(radius),
            _path_value(category_id)
        ])
        data = await self._make_request(endpoint)

        return [SatelliteAbove.from_api(item) for item in _unwrap_list(data, "above")]

    async def search_satellites(self, query: str = "", category_id: Optional[int] = None) -> List[SatelliteAbove]:
        """
        Search satellites by name or international designator.

        N2YO has no search endpoint, so this asks for everything above the
        equator at the maximum radius and filters the result locally. Satellites
        whose ground track never crosses that area are not found.

        Args:
            query: Case-insensitive substring; empty returns every satellite
            category_id: Category filter, None for all categories

        Returns:
            Matching satellites
        """
        params = AboveParams(
            observer_lat=0,
            observer_lng=0,
            search_radius=DEFAULT_SEARCH_RADIUS,
            category_id=category_id
        )
        satellites = await self.get_above(params)

        if not query:
            return satellites

        needle = query.lower()
        return [
            sat for sat in satellites
            if needle in sat.satname.lower() or needle in sat.int_designator.lower()
        ]
