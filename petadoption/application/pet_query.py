"""Typed listing options for the pet catalogue.

Query-string input is parsed into a :class:`PetQuery` here and validated
against explicit field tables, so the repository only ever receives known
columns, operators and already-coerced values.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable

from petadoption.application.errors import ValidationError
from petadoption.application.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, PageRequest
from petadoption.domain.value_objects.adoption_status import PetStatus
from petadoption.domain.value_objects.pet_attributes import (
    ActivityLevel,
    Gender,
    PetSize,
    Species,
)


class FilterOp(str, Enum):
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit", "search"})

_PARAM_PATTERN = re.compile(r"^(?P<field>[a-z_]+)(?:\[(?P<op>[a-z]+)\])?$")
_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def _to_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(raw)


def _enum_parser(enum_cls: type[Enum]) -> Callable[[str], Enum]:
    def parse(raw: str) -> Enum:
        value = raw.strip()
        for member in enum_cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(raw)

    return parse


def _to_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw.strip())
    except InvalidOperation as exc:
        raise ValueError(raw) from exc


_ORDERED_OPS = frozenset(FilterOp)
_EQUALITY_OPS = frozenset({FilterOp.EQ, FilterOp.IN})

# field name -> (value parser, operators accepted)
FILTERABLE_FIELDS: dict[str, tuple[Callable[[str], Any], frozenset[FilterOp]]] = {
    "name": (str.strip, _EQUALITY_OPS),
    "species": (_enum_parser(Species), _EQUALITY_OPS),
    "breed": (str.strip, _EQUALITY_OPS),
    "size": (_enum_parser(PetSize), _EQUALITY_OPS),
    "gender": (_enum_parser(Gender), _EQUALITY_OPS),
    "color": (str.strip, _EQUALITY_OPS),
    "adoption_status": (_enum_parser(PetStatus), _EQUALITY_OPS),
    "activity_level": (_enum_parser(ActivityLevel), _EQUALITY_OPS),
    "adoption_fee": (_to_decimal, _ORDERED_OPS),
    "age_years": (int, _ORDERED_OPS),
    "age_months": (int, _ORDERED_OPS),
    "vaccinated": (_to_bool, frozenset({FilterOp.EQ})),
    "neutered": (_to_bool, frozenset({FilterOp.EQ})),
    "special_needs": (_to_bool, frozenset({FilterOp.EQ})),
    "good_with_kids": (_to_bool, frozenset({FilterOp.EQ})),
    "good_with_other_pets": (_to_bool, frozenset({FilterOp.EQ})),
    "city": (str.strip, _EQUALITY_OPS),
    "state": (str.strip, _EQUALITY_OPS),
    "country": (str.strip, _EQUALITY_OPS),
}

SORTABLE_FIELDS = frozenset(
    {
        "name",
        "species",
        "breed",
        "size",
        "gender",
        "adoption_status",
        "adoption_fee",
        "age_years",
        "age_months",
        "created_at",
        "updated_at",
    }
)

SELECTABLE_FIELDS = frozenset(
    {
        "id",
        "name",
        "species",
        "breed",
        "age_years",
        "age_months",
        "size",
        "gender",
        "color",
        "description",
        "photos",
        "vaccinated",
        "neutered",
        "special_needs",
        "special_needs_description",
        "good_with_kids",
        "good_with_other_pets",
        "activity_level",
        "adoption_status",
        "adoption_fee",
        "location",
        "created_at",
        "updated_at",
    }
)


@dataclass(slots=True, frozen=True)
class FieldFilter:
    field: str
    op: FilterOp
    value: Any


@dataclass(slots=True, frozen=True)
class SortKey:
    field: str
    descending: bool = False


DEFAULT_SORT = (SortKey("created_at", descending=True),)


@dataclass(slots=True, frozen=True)
class PetQuery:
    filters: tuple[FieldFilter, ...] = ()
    sort: tuple[SortKey, ...] = DEFAULT_SORT
    select: frozenset[str] | None = None
    search: str | None = None
    page: PageRequest = field(default_factory=PageRequest)


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_filter(param: str, raw_value: str) -> FieldFilter:
    match = _PARAM_PATTERN.match(param)
    if not match:
        raise ValidationError(f"Unsupported query parameter: {param}")
    field_name = match.group("field")
    op_name = match.group("op") or FilterOp.EQ.value
    if field_name not in FILTERABLE_FIELDS:
        raise ValidationError(f"Cannot filter on field: {field_name}")
    try:
        op = FilterOp(op_name)
    except ValueError as exc:
        raise ValidationError(f"Unsupported filter operator: {op_name}") from exc
    parser, allowed_ops = FILTERABLE_FIELDS[field_name]
    if op not in allowed_ops:
        raise ValidationError(f"Operator '{op.value}' is not allowed on field: {field_name}")
    try:
        if op is FilterOp.IN:
            value: Any = tuple(parser(part) for part in _split_csv(raw_value))
            if not value:
                raise ValueError(raw_value)
        else:
            value = parser(raw_value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid value for {field_name}: {raw_value}",
            details={"field": field_name, "value": raw_value},
        ) from exc
    return FieldFilter(field=field_name, op=op, value=value)


def parse_sort(raw: str | None) -> tuple[SortKey, ...]:
    if not raw:
        return DEFAULT_SORT
    keys: list[SortKey] = []
    for token in _split_csv(raw):
        descending = token.startswith("-")
        name = token.lstrip("-+")
        if name not in SORTABLE_FIELDS:
            raise ValidationError(f"Cannot sort on field: {name}")
        keys.append(SortKey(name, descending))
    return tuple(keys) or DEFAULT_SORT


def parse_select(raw: str | None) -> frozenset[str] | None:
    if not raw:
        return None
    fields = set(_split_csv(raw))
    unknown = fields - SELECTABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot select fields: {', '.join(sorted(unknown))}")
    # id is always returned so clients can follow up on a projected row
    return frozenset(fields | {"id"})


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValidationError(f"{name} must be an integer") from exc


def build_pet_query(params: Iterable[tuple[str, str]]) -> PetQuery:
    """Build a validated :class:`PetQuery` from raw ``(key, value)`` pairs."""
    reserved: dict[str, str] = {}
    filters: list[FieldFilter] = []
    for key, value in params:
        if key in RESERVED_PARAMS:
            reserved[key] = value
            continue
        filters.append(parse_filter(key, value))
    search = (reserved.get("search") or "").strip() or None
    return PetQuery(
        filters=tuple(filters),
        sort=parse_sort(reserved.get("sort")),
        select=parse_select(reserved.get("select")),
        search=search,
        page=PageRequest(
            page=_parse_int("page", reserved.get("page"), DEFAULT_PAGE),
            limit=_parse_int("limit", reserved.get("limit"), DEFAULT_LIMIT),
        ),
    )
