"""
Pydantic schemas for satellite data returned by the N2YO API.

Records are immutable and keep the upstream field names (``satid``,
``satname``...) so they map one-to-one onto the API documentation.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SatelliteTLE(BaseModel):
    """Two-line element set for a satellite."""
    model_config = ConfigDict(frozen=True)

    satid: int = Field(..., description="NORAD catalog number")
    satname: str = Field(..., description="Satellite name")
    transactionscount: int = Field(0, description="API transactions in the last 60 minutes")
    tle: str = Field("", description="TLE text, lines separated by CRLF")

    @property
    def lines(self) -> List[str]:
        if not self.tle:
            return []
        return self.tle.split("\r\n")

    @classmethod
    def from_api(cls, norad_id: int, data: Dict[str, Any]) -> "SatelliteTLE":
        info = data.get("info")
        if info is None:
            info = {}

        satname = info.get("satname")
        if not satname:
            satname = f"Satellite {norad_id}"

        transactions = info.get("transactionscount")
        if transactions is None:
            transactions = 0

        tle = data.get("tle")
        if tle is None:
            tle = ""

        return cls(satid=norad_id, satname=satname, transactionscount=transactions, tle=tle)


class SatellitePosition(BaseModel):
    """Satellite position for one time step, as seen by the observer."""
    model_config = ConfigDict(frozen=True)

    satid: int = Field(..., description="NORAD catalog number")
    satname: str = Field(..., description="Satellite name")
    satlatitude: float = Field(..., description="Satellite footprint latitude in degrees")
    satlongitude: float = Field(..., description="Satellite footprint longitude in degrees")
    sataltitude: float = Field(..., description="Satellite altitude in kilometers")
    azimuth: float = Field(..., description="Azimuth relative to the observer in degrees")
    elevation: float = Field(..., description="Elevation relative to the observer in degrees")
    ra: float = Field(..., description="Right ascension in degrees")
    dec: float = Field(..., description="Declination in degrees")
    timestamp: int = Field(..., description="Unix time of the position")
    eclipsed: bool = Field(False, description="Whether the satellite is in Earth's shadow")

    @classmethod
    def from_api(cls, satid: int, satname: str, data: Dict[str, Any]) -> "SatellitePosition":
        return cls(
            satid=data.get("satid", satid),
            satname=data.get("satname", satname),
            satlatitude=data["satlatitude"],
            satlongitude=data["satlongitude"],
            sataltitude=data["sataltitude"],
            azimuth=data["azimuth"],
            elevation=data["elevation"],
            ra=data["ra"],
            dec=data["dec"],
            timestamp=data["timestamp"],
            eclipsed=data.get("eclipsed", False)
        )


class PassPoint(BaseModel):
    """Start, culmination or end point of a pass."""
    model_config = ConfigDict(frozen=True)

    azimuth: float = Field(..., description="Azimuth in degrees")
    azimuth_compass: str = Field(..., description="Azimuth as a compass direction (N, NE, ...)")
    elevation: Optional[float] = Field(None, description="Elevation in degrees")
    utc: int = Field(..., description="Unix time of the point")


class SatellitePass(BaseModel):
    """A single visual or radio pass over the observer."""
    model_config = ConfigDict(frozen=True)

    satid: int = Field(..., description="NORAD catalog number")
    satname: str = Field(..., description="Satellite name")
    start: PassPoint
    max: PassPoint
    end: PassPoint
    magnitude: Optional[float] = Field(None, description="Visual magnitude (visual passes only)")
    duration: Optional[int] = Field(None, description="Visible duration in seconds")

    @classmethod
    def from_api(cls, satid: int, satname: str, data: Dict[str, Any]) -> "SatellitePass":
        def point(prefix: str) -> PassPoint:
            return PassPoint(
                azimuth=data[f"{prefix}Az"],
                azimuth_compass=data.get(f"{prefix}AzCompass", ""),
                elevation=data.get(f"{prefix}El"),
                utc=data[f"{prefix}UTC"]
            )

        return cls(
            satid=data.get("satid", satid),
            satname=data.get("satname", satname),
            start=point("start"),
            max=point("max"),
            end=point("end"),
            magnitude=data.get("mag"),
            duration=data.get("duration")
        )


class SatelliteAbove(BaseModel):
    """A satellite currently within the search radius of an observer."""
    model_config = ConfigDict(frozen=True)

    satid: int = Field(..., description="NORAD catalog number")
    satname: str = Field(..., description="Satellite name")
    int_designator: str = Field("", description="International designator (COSPAR ID)")
    launch_date: str = Field("", description="Launch date (YYYY-MM-DD)")
    satlat: float = Field(..., description="Satellite footprint latitude in degrees")
    satlng: float = Field(..., description="Satellite footprint longitude in degrees")
    satalt: float = Field(..., description="Satellite altitude in kilometers")

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SatelliteAbove":
        return cls(
            satid=data["satid"],
            satname=data.get("satname") or f"Satellite {data['satid']}",
            int_designator=data.get("intDesignator") or "",
            launch_date=data.get("launchDate") or "",
            satlat=data["satlat"],
            satlng=data["satlng"],
            satalt=data["satalt"]
        )


# Request parameters. Optional fields stay None until the client applies its
# defaults, so an explicit 0 is never replaced.

class PositionParams(BaseModel):
    """Parameters for a positions request."""
    norad_id: int = Field(..., gt=0, description="NORAD catalog number")
    observer_lat: float = Field(..., description="Observer latitude in degrees")
    observer_lng: float = Field(..., description="Observer longitude in degrees")
    observer_alt: Optional[float] = Field(None, description="Observer altitude in meters")
    seconds: Optional[int] = Field(None, description="Number of one-second positions to return")


class VisualPassesParams(BaseModel):
    """Parameters for a visual passes request."""
    norad_id: int = Field(..., gt=0, description="NORAD catalog number")
    observer_lat: float = Field(..., description="Observer latitude in degrees")
    observer_lng: float = Field(..., description="Observer longitude in degrees")
    observer_alt: Optional[float] = Field(None, description="Observer altitude in meters")
    days: Optional[int] = Field(None, description="Number of days to predict")
    min_visibility: Optional[int] = Field(None, description="Minimum visible time in seconds")


class RadioPassesParams(BaseModel):
    """Parameters for a radio passes request."""
    norad_id: int = Field(..., gt=0, description="NORAD catalog number")
    observer_lat: float = Field(..., description="Observer latitude in degrees")
    observer_lng: float = Field(..., description="Observer longitude in degrees")
    observer_alt: Optional[float] = Field(None, description="Observer altitude in meters")
    days: Optional[int] = Field(None, description="Number of days to predict")
    min_elevation: Optional[float] = Field(None, description="Minimum pass elevation in degrees")


class AboveParams(BaseModel):
    """Parameters for an "above" request."""
    observer_lat: float = Field(..., description="Observer latitude in degrees")
    observer_lng: float = Field(..., description="Observer longitude in degrees")
    observer_alt: Optional[float] = Field(None, description="Observer altitude in meters")
    search_radius: Optional[float] = Field(None, description="Search radius in degrees (0-90)")
    category_id: Optional[int] = Field(None, description="Satellite category, 0 for all")
