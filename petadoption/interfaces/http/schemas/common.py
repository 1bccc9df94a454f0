from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from petadoption.application.pagination import Pagination

T = TypeVar("T")


class PageRefSchema(BaseModel):
    page: int
    limit: int


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ListEnvelope(BaseModel, Generic[T]):
    success: bool = True
    count: int
    pagination: dict[str, PageRefSchema] = Field(default_factory=dict)
    data: list[T]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


def pagination_payload(pagination: Pagination | None) -> dict[str, PageRefSchema]:
    if pagination is None:
        return {}
    return {key: PageRefSchema(**value) for key, value in pagination.to_dict().items()}
