import pytest
from werkzeug.security import check_password_hash

from shiftclock.core.enums import Role
from shiftclock.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from shiftclock.users.service import AuthService, SessionUser, UserService


def test_authenticate_success(users_repo):
    s_user = AuthService(users_repo).authenticate(" Carer@Example.org ", "carer123")

    assert s_user == SessionUser(user_id=1, display_name="Carla", role=Role.CARE_WORKER)


@pytest.mark.parametrize("email, password", [("carer@example.org", "nope"), ("ghost@example.org", "carer123"), ("", "")])
def test_authenticate_failure(users_repo, email, password):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate(email, password)


def test_authenticate_placeholder_hash_fails(users_repo):
    users_repo.create_user(email="legacy@example.org", name=None, role=Role.CARE_WORKER, password_hash="CHANGE_ME")

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("legacy@example.org", "CHANGE_ME")


def test_register_creates_care_worker(users_repo):
    user_id = UserService(users_repo).register(email="New@Example.org", name="  ", password="secret1")

    user = users_repo.get_by_id(user_id)
    assert user.email == "new@example.org"
    assert user.name is None
    assert user.role == Role.CARE_WORKER
    assert check_password_hash(user.password_hash, "secret1")


@pytest.mark.parametrize(
    "email, password",
    [("carer@example.org", "secret1"), ("not-an-email", "secret1"), ("x@example.org", "123")],
)
def test_register_rejects_invalid(users_repo, email, password):
    with pytest.raises(ValidationError):
        UserService(users_repo).register(email=email, name=None, password=password)


def test_update_own_name(users_repo):
    me = SessionUser(user_id=1, display_name="Carla", role=Role.CARE_WORKER)

    user = UserService(users_repo).update_profile(current=me, user_id=1, name="Carla B.")

    assert user.name == "Carla B."
    assert user.role == Role.CARE_WORKER


def test_care_worker_cannot_promote_self(users_repo):
    me = SessionUser(user_id=1, display_name="Carla", role=Role.CARE_WORKER)

    with pytest.raises(AuthorizationError):
        UserService(users_repo).update_profile(current=me, user_id=1, name=None, role=Role.MANAGER)


def test_manager_can_change_roles(users_repo):
    manager = SessionUser(user_id=9, display_name="Mina", role=Role.MANAGER)

    user = UserService(users_repo).update_profile(current=manager, user_id=2, name=None, role=Role.MANAGER)

    assert user.role == Role.MANAGER
