"""
Typed models for list-screen queries.

QueryCriteria is what a list screen (users, audit logs, watchlists, fund
explorer) sends to the collection query helper; QueryResult is one page
of what comes back. Criteria accept both the JSON spelling used by the
client (pageSize, fieldTypes, searchFields) and the Python field names.

The helpers on QueryCriteria never mutate: each returns a new criteria
object, so list-screen state can be held in whatever store the host uses.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fundkit.config.constants import FIELD_TYPES
from fundkit.config.settings import DEFAULT_PAGE_SIZE


class SortSpec(BaseModel):
    """Single-key sort."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Record field, dotted for nested values.")
    direction: Literal["asc", "desc"] = "asc"


class QueryCriteria(BaseModel):
    """Filter + search + sort + page request over an in-memory collection."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    filters: Dict[str, Any] = Field(
        default_factory=dict,
        description="field -> value; number/date ranges as {'start': .., 'end': ..}",
    )
    field_types: Dict[str, str] = Field(
        default_factory=dict,
        alias="fieldTypes",
        description="field -> 'keyword' | 'text' | 'number' | 'date'; undeclared fields are keywords",
    )
    search: Optional[str] = None
    search_fields: List[str] = Field(default_factory=list, alias="searchFields")
    sort: Optional[SortSpec] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1, alias="pageSize")

    @field_validator("field_types")
    @classmethod
    def validate_field_types(cls, v: Dict[str, str]) -> Dict[str, str]:
        unknown = {name: kind for name, kind in v.items() if kind not in FIELD_TYPES}
        if unknown:
            raise ValueError(f"field types must be one of {FIELD_TYPES}, got {unknown}")
        return v

    def field_type(self, name: str) -> str:
        return self.field_types.get(name, "keyword")

    # ------------------------------------------------------------------
    # List-screen state transitions
    # ------------------------------------------------------------------

    def with_filters(self, **filters: Any) -> "QueryCriteria":
        """Merge *filters* into the current ones and go back to page 1."""
        return self.model_copy(update={"filters": {**self.filters, **filters}, "page": 1})

    def with_sort(self, key: str, direction: str = "asc") -> "QueryCriteria":
        return self.model_copy(update={"sort": SortSpec(key=key, direction=direction)})

    def toggle_sort(self, key: str) -> "QueryCriteria":
        """Flip the direction when already sorted by *key*, otherwise sort ascending."""
        if self.sort is not None and self.sort.key == key:
            direction = "desc" if self.sort.direction == "asc" else "asc"
        else:
            direction = "asc"
        return self.with_sort(key, direction)

    def with_page(self, page: int, page_size: Optional[int] = None) -> "QueryCriteria":
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if page_size is not None and page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        update: Dict[str, Any] = {"page": page}
        if page_size is not None:
            update["page_size"] = page_size
        return self.model_copy(update=update)


@dataclass(frozen=True)
class QueryResult:
    """One page of a filtered, sorted collection. *total* counts every match."""

    items: Tuple[Any, ...]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def to_dict(self) -> dict:
        return {
            "items": list(self.items),
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "pages": self.pages,
        }
