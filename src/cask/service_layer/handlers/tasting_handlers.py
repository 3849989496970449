"""Handlers for recording tastings.

`add_tasting` is the one multi-table write path in CASK. Inside a single
unit of work it inserts the tasting, bumps the bottle and entity counters,
upserts the bottle's tag counters and grants experience on every badge the
tasting qualifies for. The tasting's unique constraint arbitrates duplicate
submissions: a collision aborts the unit before any counter moves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from cask.domain.badges import qualifying_badges
from cask.domain.errors import InvalidTastingError
from cask.domain.events import TastingCreated
from cask.domain.model import (
    NewTasting,
    Tasting,
    TastingSnapshot,
    normalize_tags,
    tasting_time_bucket,
    validate_created_at,
    validate_rating,
)
from cask.interfaces.errors import DuplicateTastingError, MissingReferenceError
from cask.interfaces.unit_of_work import AbstractUnitOfWork
from cask.service_layer import commands
from cask.service_layer.errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def add_tasting(
    cmd: commands.AddTasting,
    uow: AbstractUnitOfWork,
    clock: Callable[[], datetime],
) -> Tasting:
    """Record a tasting and apply its counter, tag and badge side effects.

    Args:
        cmd: The tasting submission.
        uow: Unit of work providing the stores.
        clock: Returns the current time; bounds a client-supplied ``created_at``.

    Returns:
        The persisted tasting.

    Raises:
        InvalidInputError: If ``created_at`` or ``rating`` is out of range, or
            a tag is too long.
        NotFoundError: If the bottle or user cannot be identified.
        ConflictError: If the user already has a tasting of this bottle at
            the same ``created_at``.
    """
    now = clock()
    try:
        created_at = (
            now if cmd.created_at is None else validate_created_at(cmd.created_at, now)
        )
        rating = validate_rating(cmd.rating)
        tags = normalize_tags(cmd.tags)
    except InvalidTastingError as e:
        raise InvalidInputError(str(e)) from e

    with uow:
        details = uow.catalog.get_bottle_details(cmd.bottle_id)
        if details is None:
            raise NotFoundError("Could not identify bottle")
        bottle = details.bottle

        try:
            tasting = uow.tastings.add(
                NewTasting(
                    bottle_id=bottle.id,
                    created_by_id=cmd.user_id,
                    created_at=tasting_time_bucket(created_at),
                    notes=cmd.notes,
                    rating=rating,
                    tags=tags,
                )
            )
        except DuplicateTastingError as e:
            raise ConflictError("Tasting already exists") from e
        except MissingReferenceError as e:
            raise NotFoundError("Could not identify user") from e

        uow.catalog.increment_bottle_tastings(bottle.id)
        uow.catalog.increment_entity_tastings(bottle.implicated_entity_ids)
        uow.tags.increment(bottle.id, tags)

        snapshot = TastingSnapshot(tasting=tasting, details=details)
        awarded = qualifying_badges(uow.badges.list(), snapshot)
        for badge in awarded:
            uow.badges.award(badge.id, cmd.user_id)

        uow.record(
            TastingCreated(
                tasting_id=tasting.id,
                bottle_id=bottle.id,
                user_id=cmd.user_id,
                badge_ids=tuple(b.id for b in awarded),
            )
        )
        uow.commit()

    return tasting


def log_tasting_created(event: TastingCreated) -> None:
    """Log a committed tasting."""
    logger.info(
        "Tasting %s recorded: bottle=%s user=%s badges=%s",
        event.tasting_id,
        event.bottle_id,
        event.user_id,
        list(event.badge_ids),
    )


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.AddTasting: add_tasting,
}

EVENT_HANDLERS: dict[type, list[Callable[..., None]]] = {
    TastingCreated: [log_tasting_created],
}
