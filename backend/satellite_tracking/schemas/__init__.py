"""
Pydantic schemas for the Satellite Tracking server.
"""

from .satellite import (
    SatelliteTLE,
    SatellitePosition,
    PassPoint,
    SatellitePass,
    SatelliteAbove,
    PositionParams,
    VisualPassesParams,
    RadioPassesParams,
    AboveParams
)

__all__ = [
    "SatelliteTLE",
    "SatellitePosition",
    "PassPoint",
    "SatellitePass",
    "SatelliteAbove",
    "PositionParams",
    "VisualPassesParams",
    "RadioPassesParams",
    "AboveParams"
]
