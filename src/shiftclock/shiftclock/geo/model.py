from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import require_field, require_in_range, require_number
from ..core.exceptions import ContractViolation


@dataclass(frozen=True)
class Coordinate:
    """WGS84 point in decimal degrees.

    Ranges are not checked here; use :meth:`parse` at the input boundary.
    """

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude: Any, longitude: Any) -> Optional["Coordinate"]:
        """Validate a raw (latitude, longitude) pair from a request.

        Both missing means "no location" and yields ``None``; a half-filled
        pair or an out-of-range value is a contract violation.
        """
        if latitude is None and longitude is None:
            return None
        lat = require_number(require_field(latitude, "latitude"), "latitude")
        lon = require_number(require_field(longitude, "longitude"), "longitude")
        require_in_range(lat, "latitude", -90.0, 90.0)
        require_in_range(lon, "longitude", -180.0, 180.0)
        return cls(latitude=lat, longitude=lon)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Optional["Coordinate"]:
        return cls.parse(data.get("latitude"), data.get("longitude"))

    def as_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class PerimeterPolicy:
    """Circular geofence of an organization."""

    center: Coordinate
    radius_meters: float

    def __post_init__(self) -> None:
        if not isinstance(self.center, Coordinate):
            raise ContractViolation("Perimeter center must be a coordinate")
        radius = require_number(self.radius_meters, "radius_meters")
        if not math.isfinite(radius) or radius <= 0:
            raise ContractViolation("radius_meters must be strictly positive")
        object.__setattr__(self, "radius_meters", radius)

    @classmethod
    def of(cls, latitude: float, longitude: float, radius_meters: float) -> "PerimeterPolicy":
        return cls(
            center=Coordinate(
                latitude=require_number(latitude, "latitude"),
                longitude=require_number(longitude, "longitude"),
            ),
            radius_meters=radius_meters,
        )
