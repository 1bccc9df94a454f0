from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"

    def is_admin(self) -> bool:
        return self is Role.ADMIN
