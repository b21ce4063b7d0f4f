from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ListLoadState = Literal["idle", "loading", "loaded", "failed"]
NotificationType = Literal["success", "danger"]


class QueryParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    sorting: str = "Name ASC"
    skip_count: int = Field(default=0, ge=0)
    max_result_count: int = Field(default=10, gt=0)
    filter: str = ""

    @model_validator(mode="after")
    def _skip_is_page_aligned(self) -> QueryParams:
        if self.skip_count % self.max_result_count:
            raise ValueError("skip_count must be a multiple of max_result_count")
        return self

    @property
    def page(self) -> int:
        return self.skip_count // self.max_result_count + 1

    def for_page(self, page: int) -> QueryParams:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        return self.model_copy(update={"skip_count": (page - 1) * self.max_result_count})

    def to_request(self) -> dict[str, Any]:
        return {
            "Sorting": self.sorting,
            "SkipCount": self.skip_count,
            "MaxResultCount": self.max_result_count,
            "Filter": self.filter,
        }


class PageResult(BaseModel):
    items: list[Any] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Any
    text: str


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: NotificationType
    message: str
    details: str | None = None


def page_count(total_count: int, max_result_count: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / max_result_count)


def shows_pagination(total_count: int, max_result_count: int) -> bool:
    return page_count(total_count, max_result_count) > 1
