from datetime import datetime, timezone

import pytest

from shiftclock.attendance.model import ClockRequest
from shiftclock.attendance.service import ClockService
from shiftclock.core.enums import ClockKind
from shiftclock.core.exceptions import ContractViolation, OutOfPerimeter, ValidationError
from shiftclock.geo import Coordinate
from shiftclock.organizations.service import OrganizationService

NOW = datetime(2026, 3, 2, 8, 0, 0, 123456, tzinfo=timezone.utc)


def make_service(events_repo, org_repo, **kwargs):
    return ClockService(events_repo, OrganizationService(org_repo), **kwargs)


def test_clock_in_inside_perimeter_is_recorded(events_repo, org_repo):
    svc = make_service(events_repo, org_repo)

    event = svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN, location=Coordinate(0, 0.01), note="early"), now=NOW)

    assert event.event_id == 1
    assert event.organization_id == "default"
    assert event.timestamp == NOW.replace(microsecond=0)
    assert events_repo.list_for_user(1) == [event]


def test_clock_in_outside_perimeter_is_rejected(events_repo, org_repo):
    svc = make_service(events_repo, org_repo)

    with pytest.raises(OutOfPerimeter) as exc:
        svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN, location=Coordinate(0, 0.02)), now=NOW)

    assert "outside the allowed perimeter" in str(exc.value)
    assert exc.value.distance_meters > exc.value.radius_meters == 2000.0
    assert events_repo.list_all() == []


def test_clock_out_outside_perimeter_is_allowed(events_repo, org_repo):
    svc = make_service(events_repo, org_repo)

    event = svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_OUT, location=Coordinate(0, 0.5)), now=NOW)

    assert event.kind == ClockKind.CLOCK_OUT


def test_clock_in_without_location_is_allowed_by_default(events_repo, org_repo):
    svc = make_service(events_repo, org_repo)

    event = svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN), now=NOW)

    assert event.location is None


def test_clock_in_without_location_can_be_required(events_repo, org_repo):
    svc = make_service(events_repo, org_repo, require_location=True)

    with pytest.raises(ValidationError):
        svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN), now=NOW)


def test_unknown_organization_is_rejected(events_repo, org_repo):
    svc = make_service(events_repo, org_repo)

    with pytest.raises(ValidationError):
        svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN, organization_id="nope"), now=NOW)


def test_repeated_clock_in_is_not_blocked_at_write_time(events_repo, org_repo):
    svc = make_service(events_repo, org_repo)

    svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN), now=NOW)
    svc.clock(ClockRequest(user_id=1, kind=ClockKind.CLOCK_IN), now=NOW)

    assert len(events_repo.list_all()) == 2


def test_request_from_payload():
    req = ClockRequest.from_payload(
        7, {"type": "clock_in", "latitude": 1, "longitude": 2, "note": "", "organizationId": "default"}
    )

    assert req.kind == ClockKind.CLOCK_IN
    assert req.location == Coordinate(1.0, 2.0)
    assert req.note is None
    assert req.organization_id == "default"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"type": "LUNCH"},
        {"type": "CLOCK_IN", "latitude": 1},
        {"type": "CLOCK_IN", "note": "n" * 501},
    ],
)
def test_request_from_payload_rejects_bad_input(payload):
    with pytest.raises(ContractViolation):
        ClockRequest.from_payload(7, payload)
