from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petadoption.domain.value_objects.role import Role
from petadoption.infrastructure.db.orm.user import UserORM


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    email: str
    role: Role
    claims: dict[str, Any] = field(default_factory=dict)


async def fetch_user(session: AsyncSession, user_id: UUID) -> UserORM | None:
    stmt = select(UserORM).where(UserORM.id == user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()
