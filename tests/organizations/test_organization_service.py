import pytest

from shiftclock.core.enums import PerimeterTransition
from shiftclock.core.exceptions import ContractViolation, ValidationError
from shiftclock.geo import Coordinate
from shiftclock.organizations.model import Organization
from shiftclock.organizations.service import OrganizationService


def test_default_organization_is_created_when_missing(empty_org_repo):
    repo = empty_org_repo
    svc = OrganizationService(repo, default_radius_meters=1500)

    org = svc.get_current()

    assert org.organization_id == "default"
    assert org.name == "Healthcare Organization"
    assert (org.latitude, org.longitude, org.radius_meters) == (0.0, 0.0, 1500.0)
    assert repo.get_by_id("default") == org


def test_update_sets_perimeter(org_repo):
    svc = OrganizationService(org_repo)

    org = svc.update(name=" St. Mary ", latitude="51.5", longitude=-0.12, radius_meters=250, location_name="")

    assert org.name == "St. Mary"
    assert org.policy.center == Coordinate(51.5, -0.12)
    assert org.radius_meters == 250.0
    assert org.location_name is None
    assert svc.get_current() == org


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"name": "", "latitude": 1, "longitude": 1, "radius_meters": 10}, ValidationError),
        ({"name": "A", "latitude": None, "longitude": None, "radius_meters": 10}, ValidationError),
        ({"name": "A", "latitude": 95, "longitude": 1, "radius_meters": 10}, ContractViolation),
        ({"name": "A", "latitude": 1, "longitude": 1, "radius_meters": 0}, ContractViolation),
    ],
)
def test_update_rejects_invalid_settings(org_repo, kwargs, error):
    with pytest.raises(error):
        OrganizationService(org_repo).update(**kwargs)


def test_check_perimeter(org_repo):
    svc = OrganizationService(org_repo)

    inside = svc.check_perimeter(Coordinate(0, 0.01))
    outside = svc.check_perimeter(Coordinate(0, 0.02))

    assert inside.within is True
    assert inside.distance_meters == pytest.approx(1112, abs=1)
    assert outside.within is False
    assert outside.as_dict()["radiusMeters"] == 2000.0


def test_check_perimeter_without_organization_is_false(empty_org_repo):
    check = OrganizationService(empty_org_repo).check_perimeter(Coordinate(0, 0))

    assert check.within is False
    assert check.distance_meters is None


def test_new_watch_uses_current_perimeter_and_threshold(org_repo):
    watch = OrganizationService(org_repo, movement_threshold_meters=100).new_watch()

    watch.observe(Coordinate(0, 0.0))
    assert watch.observe(Coordinate(0, 0.0005)) is None  # ~56 m, below threshold
    assert watch.observe(Coordinate(0, 0.03)) == PerimeterTransition.EXITED


def test_stored_organization_with_broken_radius_has_no_policy():
    org = Organization("legacy", "Old Ward", 1.0, 2.0, -5.0)

    assert org.center == Coordinate(1.0, 2.0)
    with pytest.raises(ContractViolation):
        org.policy
