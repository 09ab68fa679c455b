from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from shiftclock.container import build_services
from shiftclock.core.enums import Role
from shiftclock.ledger.model import ClockEvent
from shiftclock.main import create_app
from shiftclock.organizations.model import Organization
from shiftclock.users.model import User


@dataclass
class InMemoryUsers:
    users: dict[int, User] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def list_all(self):
        return [self.users[k] for k in sorted(self.users)]

    def create_user(self, *, email: str, name, role: Role, password_hash: str) -> int:
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(user_id=user_id, email=email, name=name, role=role, password_hash=password_hash)
        return user_id

    def update_profile(self, user_id: int, *, name, role: Role) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], name=name, role=role)
        return True


@dataclass
class InMemoryOrganizations:
    orgs: dict[str, Organization] = field(default_factory=dict)

    def get_by_id(self, organization_id: str) -> Optional[Organization]:
        return self.orgs.get(organization_id)

    def get_first(self) -> Optional[Organization]:
        return self.orgs[min(self.orgs)] if self.orgs else None

    def upsert(self, organization: Organization) -> Organization:
        self.orgs[organization.organization_id] = organization
        return organization


class InMemoryClockEvents:
    """Mimics the store: append-only, reads newest first."""

    def __init__(self):
        self._events: list[ClockEvent] = []

    def append(self, event: ClockEvent) -> ClockEvent:
        saved = replace(event, event_id=len(self._events) + 1)
        self._events.append(saved)
        return saved

    def list_for_user(self, user_id):
        return [e for e in reversed(self._events) if e.user_id == user_id]

    def list_all(self, *, since=None):
        return [e for e in reversed(self._events) if since is None or e.timestamp >= since]


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        {
            1: User(1, "carer@example.org", "Carla", Role.CARE_WORKER, generate_password_hash("carer123")),
            2: User(2, "other@example.org", None, Role.CARE_WORKER, generate_password_hash("other123")),
            9: User(9, "manager@example.org", "Mina", Role.MANAGER, generate_password_hash("manager123")),
        }
    )


@pytest.fixture
def org_repo():
    return InMemoryOrganizations(
        {"default": Organization("default", "Ward 7", 0.0, 0.0, 2000.0)}
    )


@pytest.fixture
def empty_org_repo():
    return InMemoryOrganizations()


@pytest.fixture
def events_repo():
    return InMemoryClockEvents()


@pytest.fixture
def container(users_repo, org_repo, events_repo):
    return build_services(users_repo=users_repo, organizations_repo=org_repo, events_repo=events_repo)


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
