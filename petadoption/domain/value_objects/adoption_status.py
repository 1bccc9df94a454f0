from __future__ import annotations

from enum import Enum


class PetStatus(str, Enum):
    AVAILABLE = "Available"
    PENDING = "Pending"
    ADOPTED = "Adopted"


class AdoptionStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: AdoptionStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[AdoptionStatus, frozenset[AdoptionStatus]] = {
    AdoptionStatus.PENDING: frozenset(
        {AdoptionStatus.APPROVED, AdoptionStatus.REJECTED, AdoptionStatus.CANCELLED}
    ),
    AdoptionStatus.APPROVED: frozenset(),
    AdoptionStatus.REJECTED: frozenset(),
    AdoptionStatus.CANCELLED: frozenset(),
}
