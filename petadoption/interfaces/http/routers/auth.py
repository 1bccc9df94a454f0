from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from petadoption.application.use_cases.auth import get_me, login_user, register_user
from petadoption.config.settings import Settings
from petadoption.infrastructure.auth.context import AuthContext
from petadoption.infrastructure.auth.jwt_service import JWTService
from petadoption.infrastructure.auth.password import PasswordHasher
from petadoption.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_jwt_service,
    get_password_hasher,
    get_uow,
)
from petadoption.interfaces.http.schemas.auth import (
    AuthUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from petadoption.interfaces.http.schemas.common import Envelope, MessageEnvelope
from petadoption.interfaces.http.schemas.users import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
) -> TokenResponse:
    user = await register_user.execute(
        uow=uow,
        payload=register_user.RegisterUserInput(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            phone=payload.phone,
            address=payload.address.to_domain() if payload.address else None,
            bio=payload.bio,
        ),
        password_hasher=password_hasher,
        allow_admin_signup=settings.allow_admin_signup,
    )
    return TokenResponse(
        token=login_user.issue_token(jwt_service, user),
        user=AuthUser(id=user.id, name=user.name, email=user.email, role=user.role),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> TokenResponse:
    result = await login_user.execute(
        uow=uow,
        payload=login_user.LoginInput(email=payload.email, password=payload.password),
        password_hasher=password_hasher,
        jwt_service=jwt_service,
    )
    user = result.user
    return TokenResponse(
        token=result.access_token,
        token_type=result.token_type,
        user=AuthUser(id=user.id, name=user.name, email=user.email, role=user.role),
    )


@router.get("/me", response_model=Envelope[UserResponse])
async def read_me(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[UserResponse]:
    user = await get_me.execute(uow, context.user_id)
    return Envelope[UserResponse](data=UserResponse.from_domain(user))


@router.get("/logout", response_model=MessageEnvelope)
async def logout(context: AuthContext = Depends(get_auth_context)) -> MessageEnvelope:
    # Tokens are stateless; the client simply discards its copy
    logger.info("User %s logged out", context.user_id)
    return MessageEnvelope(message="User logged out successfully")
