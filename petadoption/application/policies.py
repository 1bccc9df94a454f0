from __future__ import annotations

from enum import Enum
from typing import Protocol
from uuid import UUID

from petadoption.application.errors import PermissionDenied
from petadoption.domain.value_objects.role import Role


class Actor(Protocol):
    user_id: UUID
    role: Role


class Action(str, Enum):
    PET_CREATE = "pet:create"
    PET_UPDATE = "pet:update"
    PET_DELETE = "pet:delete"
    PET_SET_STATUS = "pet:set_status"
    ADOPTION_READ = "adoption:read"
    ADOPTION_APPROVE = "adoption:approve"
    ADOPTION_REJECT = "adoption:reject"
    ADOPTION_CANCEL = "adoption:cancel"
    ADOPTION_DELETE = "adoption:delete"
    ADOPTION_LIST_FOR_PET = "adoption:list_for_pet"
    USER_LIST = "user:list"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_CHANGE_ROLE = "user:change_role"
    USER_CHANGE_PASSWORD = "user:change_password"
    USER_DELETE = "user:delete"


ADMIN_ONLY = frozenset(
    {
        Action.PET_CREATE,
        Action.PET_UPDATE,
        Action.PET_DELETE,
        Action.PET_SET_STATUS,
        Action.ADOPTION_APPROVE,
        Action.ADOPTION_REJECT,
        Action.ADOPTION_DELETE,
        Action.ADOPTION_LIST_FOR_PET,
        Action.USER_LIST,
        Action.USER_CHANGE_ROLE,
        Action.USER_DELETE,
    }
)

OWNER_OR_ADMIN = frozenset(
    {
        Action.ADOPTION_READ,
        Action.ADOPTION_CANCEL,
        Action.USER_READ,
        Action.USER_UPDATE,
        Action.USER_CHANGE_PASSWORD,
    }
)

DENIAL_MESSAGES: dict[Action, str] = {
    Action.ADOPTION_READ: "Not authorized to access this adoption request",
    Action.ADOPTION_APPROVE: "Not authorized to change adoption status",
    Action.ADOPTION_REJECT: "Not authorized to change adoption status",
    Action.ADOPTION_CANCEL: "Not authorized to cancel this adoption request",
    Action.ADOPTION_DELETE: "Not authorized to delete adoption records",
}


def is_allowed(actor: Actor, action: Action, owner_id: UUID | None = None) -> bool:
    if actor.role.is_admin():
        return True
    if action in ADMIN_ONLY:
        return False
    if action in OWNER_OR_ADMIN:
        return owner_id is not None and owner_id == actor.user_id
    return False


def authorize(actor: Actor, action: Action, owner_id: UUID | None = None) -> None:
    """Raise :class:`PermissionDenied` unless ``actor`` may perform ``action``.

    ``owner_id`` identifies the user that owns the target resource and is only
    consulted for owner-or-admin actions.
    """
    if not is_allowed(actor, action, owner_id):
        message = DENIAL_MESSAGES.get(
            action, f"User role '{actor.role.value}' is not authorized to perform {action.value}"
        )
        raise PermissionDenied(message, details={"action": action.value})
