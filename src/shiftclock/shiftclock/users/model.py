from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff member.

    Plain data object; no DB access here.
    """

    user_id: int
    email: str
    name: Optional[str]
    role: Role
    password_hash: str
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def as_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "name": self.name, "role": self.role.value}
