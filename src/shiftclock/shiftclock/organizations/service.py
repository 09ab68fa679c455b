from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_non_empty, require_number
from ..core.constants import (
    DEFAULT_MOVEMENT_THRESHOLD_M,
    DEFAULT_ORGANIZATION_ID,
    DEFAULT_ORGANIZATION_NAME,
    DEFAULT_PERIMETER_RADIUS_M,
)
from ..core.exceptions import ValidationError
from ..geo.model import Coordinate, PerimeterPolicy
from ..geo.perimeter import distance_meters, is_within_perimeter
from ..geo.watch import PerimeterWatch
from .model import Organization, PerimeterCheck
from .repository import OrganizationRepository

logger = logging.getLogger(__name__)


class OrganizationService:
    def __init__(
        self,
        organizations: OrganizationRepository,
        *,
        default_radius_meters: float = DEFAULT_PERIMETER_RADIUS_M,
        movement_threshold_meters: float = DEFAULT_MOVEMENT_THRESHOLD_M,
    ):
        self._organizations = organizations
        self._default_radius = float(default_radius_meters)
        self._movement_threshold = float(movement_threshold_meters)

    def get_current(self) -> Organization:
        """Single active organization; created with a (0, 0) center when missing."""
        org = self._organizations.get_first()
        if org:
            return org

        org = Organization(
            organization_id=DEFAULT_ORGANIZATION_ID,
            name=DEFAULT_ORGANIZATION_NAME,
            latitude=0.0,
            longitude=0.0,
            radius_meters=self._default_radius,
        )
        logger.info("No organization configured, creating default %r", org.organization_id)
        return self._organizations.upsert(org)

    def get(self, organization_id: Optional[str] = None) -> Optional[Organization]:
        if organization_id:
            return self._organizations.get_by_id(organization_id)
        return self._organizations.get_first()

    def update(
        self,
        *,
        name: str,
        latitude: Any,
        longitude: Any,
        radius_meters: Any,
        location_name: Optional[str] = None,
    ) -> Organization:
        name = require_non_empty(name, "Organization name")
        center = Coordinate.parse(latitude, longitude)
        if center is None:
            raise ValidationError("Organization location is required")
        policy = PerimeterPolicy(center=center, radius_meters=require_number(radius_meters, "radius"))

        current = self.get_current()
        org = Organization(
            organization_id=current.organization_id,
            name=name,
            latitude=policy.center.latitude,
            longitude=policy.center.longitude,
            radius_meters=policy.radius_meters,
            location_name=(location_name or "").strip() or None,
        )
        saved = self._organizations.upsert(org)
        logger.info(
            "Organization %s perimeter set to (%.6f, %.6f) r=%.0fm",
            saved.organization_id, saved.latitude, saved.longitude, saved.radius_meters,
        )
        return saved

    def check_perimeter(self, point: Coordinate, organization_id: Optional[str] = None) -> PerimeterCheck:
        org = self.get(organization_id)
        if not org:
            return PerimeterCheck(within=False, distance_meters=None, radius_meters=None)

        return PerimeterCheck(
            within=is_within_perimeter(point, org.policy),
            distance_meters=distance_meters(point, org.center),
            radius_meters=org.radius_meters,
        )

    def new_watch(self) -> PerimeterWatch:
        """Per-client watcher over the current perimeter, using the configured movement threshold."""
        return PerimeterWatch(self.get_current().policy, min_movement_meters=self._movement_threshold)

    @property
    def movement_threshold_meters(self) -> float:
        return self._movement_threshold
