"""
HTTP request/response models.

Payloads use camelCase on the wire (``createdAt``, ``createdBy``); the
models expose snake_case attributes and accept either spelling on input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from cask.domain.model import (
    MAX_RATING,
    MAX_TAG_LENGTH,
    MIN_RATING,
    Comment,
    Tasting,
)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(ApiModel):
    error: str


Tag = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=MAX_TAG_LENGTH)
]


class TastingRequest(ApiModel):
    bottle: int
    notes: str | None = Field(default=None, max_length=10_000)
    rating: float | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    tags: list[Tag] | None = Field(default=None, max_length=100)
    created_at: datetime | None = None


class TastingResponse(ApiModel):
    id: int
    bottle: int
    created_by: int
    notes: str | None
    rating: float | None
    tags: list[str]
    created_at: datetime

    @classmethod
    def from_tasting(cls, tasting: Tasting) -> TastingResponse:
        return cls(
            id=tasting.id,
            bottle=tasting.bottle_id,
            created_by=tasting.created_by_id,
            notes=tasting.notes,
            rating=tasting.rating,
            tags=list(tasting.tags),
            created_at=tasting.created_at,
        )


class CommentRequest(ApiModel):
    comment: str = Field(..., min_length=1, max_length=10_000)


class CommentResponse(ApiModel):
    id: int
    tasting: int
    created_by: int
    comment: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> CommentResponse:
        return cls(
            id=comment.id,
            tasting=comment.tasting_id,
            created_by=comment.created_by_id,
            comment=comment.comment,
            created_at=comment.created_at,
        )


class PriceRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=255)
    # cents
    price: int = Field(..., ge=0)
    url: str = Field(..., min_length=1)
    # bottle id, or exact bottle name
    bottle: int | str | None = None


class StorePricesRequest(ApiModel):
    prices: list[PriceRequest]


class StorePricesResponse(ApiModel):
    count: int
