from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from petadoption.application.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, PageRequest
from petadoption.application.use_cases.auth import change_password
from petadoption.application.use_cases.users import delete_user, get_user, list_users, update_user
from petadoption.infrastructure.auth.context import AuthContext
from petadoption.infrastructure.auth.password import PasswordHasher
from petadoption.interfaces.http.deps import get_auth_context, get_password_hasher, get_uow
from petadoption.interfaces.http.schemas.common import (
    Envelope,
    ListEnvelope,
    MessageEnvelope,
    pagination_payload,
)
from petadoption.interfaces.http.schemas.users import (
    PasswordChangeRequest,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=ListEnvelope[UserResponse])
async def list_users_endpoint(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ListEnvelope[UserResponse]:
    result = await list_users.execute(uow, context, PageRequest(page=page, limit=limit))
    return ListEnvelope[UserResponse](
        count=len(result.items),
        pagination=pagination_payload(result.pagination),
        data=[UserResponse.from_domain(user) for user in result.items],
    )


@router.get("/{user_id}", response_model=Envelope[UserResponse])
async def get_user_endpoint(
    user_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[UserResponse]:
    user = await get_user.execute(uow, context, user_id)
    return Envelope[UserResponse](data=UserResponse.from_domain(user))


@router.put("/{user_id}", response_model=Envelope[UserResponse])
async def update_user_endpoint(
    user_id: UUID,
    payload: UserUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[UserResponse]:
    fields = payload.model_dump(exclude={"address"}, exclude_none=True)
    if payload.address is not None:
        fields.update(payload.address.model_dump(exclude_none=True))
    user = await update_user.execute(uow, context, user_id, update_user.UpdateUserInput(**fields))
    return Envelope[UserResponse](data=UserResponse.from_domain(user))


@router.delete("/{user_id}", response_model=MessageEnvelope)
async def delete_user_endpoint(
    user_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> MessageEnvelope:
    await delete_user.execute(uow, context, user_id)
    return MessageEnvelope(message="User deleted")


@router.put("/{user_id}/password", response_model=MessageEnvelope)
async def change_password_endpoint(
    user_id: UUID,
    payload: PasswordChangeRequest,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> MessageEnvelope:
    await change_password.execute(
        uow=uow,
        actor=context,
        payload=change_password.ChangePasswordInput(
            user_id=user_id,
            new_password=payload.new_password,
            current_password=payload.current_password,
        ),
        password_hasher=password_hasher,
    )
    return MessageEnvelope(message="Password updated")
