from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.domain.models.adoption import Adoption
from petadoption.domain.models.pet import Pet
from petadoption.domain.models.user import User


@dataclass(slots=True)
class AdoptionView:
    adoption: Adoption
    pet: Pet | None = None
    user: User | None = None


async def build_views(
    uow: UnitOfWork,
    adoptions: Sequence[Adoption],
    *,
    with_pet: bool = True,
    with_user: bool = True,
) -> list[AdoptionView]:
    """Attach the referenced pet and applicant to each adoption request."""
    pets: dict = {}
    users: dict = {}
    if with_pet and adoptions:
        pets = await uow.pets.get_many({a.pet_id for a in adoptions})
    if with_user and adoptions:
        users = await uow.users.get_many({a.user_id for a in adoptions})
    return [
        AdoptionView(adoption=a, pet=pets.get(a.pet_id), user=users.get(a.user_id))
        for a in adoptions
    ]
