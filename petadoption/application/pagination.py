from __future__ import annotations

from dataclasses import dataclass

from petadoption.application.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(slots=True, frozen=True)
class PageRef:
    page: int
    limit: int


@dataclass(slots=True, frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be 1 or greater")
        if self.limit <= 0 or self.limit > MAX_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(slots=True, frozen=True)
class Pagination:
    next: PageRef | None = None
    prev: PageRef | None = None

    def to_dict(self) -> dict[str, dict[str, int]]:
        result: dict[str, dict[str, int]] = {}
        if self.next:
            result["next"] = {"page": self.next.page, "limit": self.next.limit}
        if self.prev:
            result["prev"] = {"page": self.prev.page, "limit": self.prev.limit}
        return result


def build_pagination(request: PageRequest, total: int) -> Pagination:
    """Neighbouring pages for an offset window over ``total`` rows.

    ``next`` is present while rows remain past the current window, ``prev``
    whenever the window does not start at the first row.
    """
    end_index = request.page * request.limit
    next_ref = PageRef(request.page + 1, request.limit) if end_index < total else None
    prev_ref = PageRef(request.page - 1, request.limit) if request.offset > 0 else None
    return Pagination(next=next_ref, prev=prev_ref)
