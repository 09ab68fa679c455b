from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..geo.model import Coordinate, PerimeterPolicy


@dataclass(frozen=True)
class Organization:
    """Employer location and the perimeter staff must be inside to clock in."""

    organization_id: str
    name: str
    latitude: float
    longitude: float
    radius_meters: float
    location_name: Optional[str] = None

    @property
    def center(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def policy(self) -> PerimeterPolicy:
        return PerimeterPolicy.of(self.latitude, self.longitude, self.radius_meters)

    def as_dict(self) -> dict:
        return {
            "id": self.organization_id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius": self.radius_meters,
            "locationName": self.location_name,
        }


@dataclass(frozen=True)
class PerimeterCheck:
    within: bool
    distance_meters: Optional[float]
    radius_meters: Optional[float]

    def as_dict(self) -> dict:
        return {
            "isWithinPerimeter": self.within,
            "distanceMeters": round(self.distance_meters, 1) if self.distance_meters is not None else None,
            "radiusMeters": self.radius_meters,
        }
