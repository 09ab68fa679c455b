from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    display_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, display_name=user.display_name, role=user.role)


class UserService:
    """Use case: manage staff accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        return user

    def list_users(self):
        return list(self._users.list_all())

    def register(self, *, email: str, name: Optional[str], password: str, role: Role = Role.CARE_WORKER) -> int:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        require_min_length(password, "Password", 6)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user_id = self._users.create_user(
            email=email,
            name=(name or "").strip() or None,
            role=role,
            password_hash=generate_password_hash(password),
        )
        logger.info("Registered user %s with role %s", user_id, role.value)
        return user_id

    def update_profile(self, *, current: SessionUser, user_id: int, name: Optional[str], role: Optional[Role] = None) -> User:
        """Users edit their own name; only managers may change a role."""
        user = self.get(user_id)
        if current.user_id != user_id and current.role != Role.MANAGER:
            raise AuthorizationError("You cannot edit another user's profile")
        if role is not None and role != user.role and current.role != Role.MANAGER:
            raise AuthorizationError("Only managers can change roles")

        new_name = (name or "").strip() or user.name
        new_role = role or user.role
        self._users.update_profile(user_id, name=new_name, role=new_role)
        return self.get(user_id)
