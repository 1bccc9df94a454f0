from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from petadoption.application.errors import ValidationError
from petadoption.application.pet_query import build_pet_query
from petadoption.application.use_cases.pets import (
    create_pet,
    delete_pet,
    get_pet,
    list_pets,
    set_pet_status,
    update_pet,
)
from petadoption.application.use_cases.pets.photos import PhotoUpload, UploadLimits
from petadoption.config.settings import Settings
from petadoption.infrastructure.auth.context import AuthContext
from petadoption.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_storage_service,
    get_uow,
)
from petadoption.interfaces.http.schemas.common import (
    Envelope,
    ListEnvelope,
    MessageEnvelope,
    pagination_payload,
)
from petadoption.interfaces.http.schemas.pets import (
    PetCreate,
    PetResponse,
    PetStatusUpdate,
    PetUpdate,
    project_pet,
)

router = APIRouter(prefix="/pets", tags=["pets"])


def _parse_form_payload(model: type[BaseModel], raw: str | None) -> BaseModel:
    try:
        return model.model_validate_json(raw or "{}")
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid pet data",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc


def _flatten(payload: PetCreate | PetUpdate) -> dict:
    data = payload.model_dump(exclude={"location"}, exclude_unset=isinstance(payload, PetUpdate))
    if payload.location is not None:
        data.update(payload.location.model_dump(exclude_unset=True))
    return data


async def _read_uploads(files: list[UploadFile] | None) -> list[PhotoUpload]:
    uploads: list[PhotoUpload] = []
    for file in files or []:
        uploads.append(
            PhotoUpload(
                filename=file.filename or "upload",
                content_type=file.content_type or "",
                data=await file.read(),
            )
        )
    return uploads


def _limits(settings: Settings) -> UploadLimits:
    return UploadLimits(max_files=settings.max_upload_files, max_bytes=settings.max_upload_bytes)


@router.get("", response_model=ListEnvelope[dict])
async def list_pets_endpoint(request: Request, uow=Depends(get_uow)) -> ListEnvelope[dict]:
    query = build_pet_query(request.query_params.multi_items())
    result = await list_pets.execute(uow, query)
    return ListEnvelope[dict](
        count=len(result.items),
        pagination=pagination_payload(result.pagination),
        data=[project_pet(pet, result.select) for pet in result.items],
    )


@router.get("/{pet_id}", response_model=Envelope[PetResponse])
async def get_pet_endpoint(pet_id: UUID, uow=Depends(get_uow)) -> Envelope[PetResponse]:
    pet = await get_pet.execute(uow, pet_id)
    return Envelope[PetResponse](data=PetResponse.from_domain(pet))


@router.post("", response_model=Envelope[PetResponse], status_code=status.HTTP_201_CREATED)
async def create_pet_endpoint(
    data: str = Form(..., description="Pet fields as a JSON document"),
    photos: list[UploadFile] | None = File(None),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    storage=Depends(get_storage_service),
    settings: Settings = Depends(get_app_settings),
) -> Envelope[PetResponse]:
    payload = _parse_form_payload(PetCreate, data)
    pet = await create_pet.execute(
        uow,
        context,
        create_pet.CreatePetInput(**_flatten(payload)),
        storage=storage,
        uploads=await _read_uploads(photos),
        limits=_limits(settings),
    )
    return Envelope[PetResponse](data=PetResponse.from_domain(pet))


@router.put("/{pet_id}", response_model=Envelope[PetResponse])
async def update_pet_endpoint(
    pet_id: UUID,
    data: str | None = Form(None, description="Changed pet fields as a JSON document"),
    photos: list[UploadFile] | None = File(None),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    storage=Depends(get_storage_service),
    settings: Settings = Depends(get_app_settings),
) -> Envelope[PetResponse]:
    payload = _parse_form_payload(PetUpdate, data)
    pet = await update_pet.execute(
        uow,
        context,
        pet_id,
        update_pet.UpdatePetInput(**_flatten(payload)),
        storage=storage,
        uploads=await _read_uploads(photos),
        limits=_limits(settings),
    )
    return Envelope[PetResponse](data=PetResponse.from_domain(pet))


@router.delete("/{pet_id}", response_model=MessageEnvelope)
async def delete_pet_endpoint(
    pet_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> MessageEnvelope:
    await delete_pet.execute(uow, context, pet_id)
    return MessageEnvelope(message="Pet deleted")


@router.put("/{pet_id}/status", response_model=Envelope[PetResponse])
async def set_pet_status_endpoint(
    pet_id: UUID,
    payload: PetStatusUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Envelope[PetResponse]:
    pet = await set_pet_status.execute(uow, context, pet_id, payload.adoption_status)
    return Envelope[PetResponse](data=PetResponse.from_domain(pet))
