from __future__ import annotations

from dataclasses import dataclass

from petadoption.application.errors import AuthError
from petadoption.application.interfaces.unit_of_work import UnitOfWork
from petadoption.domain.models.user import User
from petadoption.infrastructure.auth.jwt_service import JWTService
from petadoption.infrastructure.auth.password import PasswordHasher


@dataclass(slots=True)
class LoginInput:
    email: str
    password: str


@dataclass(slots=True)
class LoginResult:
    access_token: str
    token_type: str
    user: User


async def execute(
    *,
    uow: UnitOfWork,
    payload: LoginInput,
    password_hasher: PasswordHasher,
    jwt_service: JWTService,
) -> LoginResult:
    user = await uow.users.get_by_email(payload.email.lower())
    if not user or not user.is_active:
        raise AuthError("Invalid credentials")
    if not password_hasher.verify(payload.password, user.hashed_password):
        raise AuthError("Invalid credentials")
    token = issue_token(jwt_service, user)
    return LoginResult(access_token=token, token_type="bearer", user=user)


def issue_token(jwt_service: JWTService, user: User) -> str:
    return jwt_service.create_access_token(
        subject=user.id, extra_claims={"role": user.role.value}
    )
