"""Handlers for badge definitions."""

from __future__ import annotations

import logging
from collections.abc import Callable

from cask.domain.badges import build_checks, validate_badge_name, validate_max_level
from cask.domain.errors import BadgeCheckError, InvalidBadgeError
from cask.interfaces.errors import DuplicateRecordError
from cask.interfaces.unit_of_work import AbstractUnitOfWork
from cask.service_layer import commands
from cask.service_layer.errors import ConflictError, InvalidInputError

logger = logging.getLogger(__name__)


def create_badge(cmd: commands.CreateBadge, uow: AbstractUnitOfWork) -> int:
    """Define a badge and return its id.

    Raises:
        InvalidInputError: If the name is blank, ``max_level`` is outside
            1..100, no checks are given, or a check is malformed.
        ConflictError: If a badge with the same name exists.
    """
    try:
        name = validate_badge_name(cmd.name)
        max_level = validate_max_level(cmd.max_level)
        checks = build_checks(cmd.checks)
    except (InvalidBadgeError, BadgeCheckError) as e:
        raise InvalidInputError(str(e)) from e

    with uow:
        try:
            badge_id = uow.badges.add(name, checks, max_level)
        except DuplicateRecordError as e:
            raise ConflictError(f"Badge '{name}' already exists") from e
        uow.commit()

    logger.info("Created badge %s (%s) with %d check(s)", badge_id, name, len(checks))
    return badge_id


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateBadge: create_badge,
}
