from __future__ import annotations

from typing import Optional, Protocol

from .model import Organization


class OrganizationRepository(Protocol):
    def get_by_id(self, organization_id: str) -> Optional[Organization]:
        raise NotImplementedError

    def get_first(self) -> Optional[Organization]:
        raise NotImplementedError

    def upsert(self, organization: Organization) -> Organization:
        raise NotImplementedError
