"""
Tasting, comment and store-price endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from cask.service_layer import commands
from cask.service_layer.commands import Command
from cask.service_layer.errors import ConflictError, InvalidInputError
from cask.service_layer.messagebus import MessageBus

from . import schemas
from .dependencies import get_current_user_id, get_message_bus
from .errors import ApiError

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": schemas.ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_409_CONFLICT,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}


def dispatch(bus: MessageBus, cmd: Command, failure_message: str):
    """Handle ``cmd`` and translate service errors into API errors.

    Anything that is not a service-layer error is reported to the client as
    ``failure_message`` only; the message bus has already logged the details.
    """
    try:
        return bus.handle(cmd)
    except ConflictError as e:
        raise ApiError(status.HTTP_409_CONFLICT, e.message) from e
    except InvalidInputError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, e.message) from e
    except Exception as e:  # pylint: disable=broad-except
        logger.error("%s: %s", failure_message, type(e).__name__)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message) from e


@router.post(
    "/tastings",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.TastingResponse,
    responses=ERROR_RESPONSES,
)
def create_tasting(
    request: schemas.TastingRequest,
    user_id: int = Depends(get_current_user_id),
    bus: MessageBus = Depends(get_message_bus),
) -> schemas.TastingResponse:
    cmd = commands.AddTasting(
        bottle_id=request.bottle,
        user_id=user_id,
        notes=request.notes,
        rating=request.rating,
        tags=tuple(request.tags or ()),
        created_at=request.created_at,
    )
    tasting = dispatch(bus, cmd, "Unable to create tasting")
    return schemas.TastingResponse.from_tasting(tasting)


@router.post(
    "/tastings/{tasting_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CommentResponse,
    responses=ERROR_RESPONSES,
)
def create_comment(
    tasting_id: int,
    request: schemas.CommentRequest,
    user_id: int = Depends(get_current_user_id),
    bus: MessageBus = Depends(get_message_bus),
) -> schemas.CommentResponse:
    cmd = commands.AddComment(
        tasting_id=tasting_id, user_id=user_id, comment=request.comment
    )
    comment = dispatch(bus, cmd, "Unable to create comment")
    return schemas.CommentResponse.from_comment(comment)


@router.post(
    "/stores/{store_type}/prices",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.StorePricesResponse,
    responses=ERROR_RESPONSES,
)
def submit_store_prices(
    store_type: str,
    request: schemas.StorePricesRequest,
    bus: MessageBus = Depends(get_message_bus),
) -> schemas.StorePricesResponse:
    cmd = commands.SubmitStorePrices(
        store_type=store_type,
        prices=tuple(
            commands.SubmittedPrice(
                name=p.name, price=p.price, url=p.url, bottle=p.bottle
            )
            for p in request.prices
        ),
    )
    count = dispatch(bus, cmd, "Unable to store prices")
    return schemas.StorePricesResponse(count=count)


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
