from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from petadoption.application.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, PageRequest
from petadoption.application.use_cases.adoptions import (
    create_adoption,
    delete_adoption,
    get_adoption,
    list_adoptions,
    list_pet_requests,
    list_user_history,
    update_adoption_status,
)
from petadoption.infrastructure.auth.context import AuthContext
from petadoption.interfaces.http.deps import get_auth_context, get_uow
from petadoption.interfaces.http.schemas.adoptions import (
    AdoptionCreate,
    AdoptionResponse,
    AdoptionStatusUpdate,
)
from petadoption.interfaces.http.schemas.common import (
    Envelope,
    ListEnvelope,
    MessageEnvelope,
    pagination_payload,
)

router = APIRouter(prefix="/adoptions", tags=["adoptions"])


@router.get("", response_model=ListEnvelope[AdoptionResponse])
async def list_adoptions_endpoint(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ListEnvelope[AdoptionResponse]:
    result = await list_adoptions.execute(uow, context, PageRequest(page=page, limit=limit))
    return ListEnvelope[AdoptionResponse](
        count=len(result.items),
        pagination=pagination_payload(result.pagination),
        data=[AdoptionResponse.from_view(view) for view in result.items],
    )


# Registered before "/{adoption_id}" so "history" is not parsed as an id
@router.get("/history", response_model=ListEnvelope[AdoptionResponse])
async def adoption_history_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ListEnvelope[AdoptionResponse]:
    views = await list_user_history.execute(uow, context)
    return ListEnvelope[AdoptionResponse](
        count=len(views), data=[AdoptionResponse.from_view(view) for view in views]
    )


@router.get("/pet/{pet_id}", response_model=ListEnvelope[AdoptionResponse])
async def pet_adoptions_endpoint(
    pet_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ListEnvelope[AdoptionResponse]:
    views = await list_pet_requests.execute(uow, context, pet_id)
    return ListEnvelope[AdoptionResponse](
        count=len(views), data=[AdoptionResponse.from_view(view) for view in views]
    )


@router.get("/{adoption_id}", response_model=Envelope[AdoptionResponse])
async def get_adoption_endpoint(
    adoption_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[AdoptionResponse]:
    view = await get_adoption.execute(uow, context, adoption_id)
    return Envelope[AdoptionResponse](data=AdoptionResponse.from_view(view))


@router.post("", response_model=Envelope[AdoptionResponse], status_code=status.HTTP_201_CREATED)
async def create_adoption_endpoint(
    payload: AdoptionCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[AdoptionResponse]:
    adoption = await create_adoption.execute(
        uow,
        context,
        create_adoption.CreateAdoptionInput(
            pet_id=payload.pet_id, application=payload.application.to_domain()
        ),
    )
    return Envelope[AdoptionResponse](data=AdoptionResponse.from_domain(adoption))


@router.put("/{adoption_id}/status", response_model=Envelope[AdoptionResponse])
async def update_adoption_status_endpoint(
    adoption_id: UUID,
    payload: AdoptionStatusUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[AdoptionResponse]:
    adoption = await update_adoption_status.execute(
        uow,
        context,
        adoption_id,
        update_adoption_status.UpdateAdoptionStatusInput(
            status=payload.status, admin_comments=payload.admin_comments
        ),
    )
    return Envelope[AdoptionResponse](data=AdoptionResponse.from_domain(adoption))


@router.delete("/{adoption_id}", response_model=MessageEnvelope)
async def delete_adoption_endpoint(
    adoption_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> MessageEnvelope:
    await delete_adoption.execute(uow, context, adoption_id)
    return MessageEnvelope(message="Adoption request deleted")
