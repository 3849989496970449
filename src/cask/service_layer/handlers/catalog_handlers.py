"""Handlers for the catalog: entities, bottles and users."""

from __future__ import annotations

import logging
from collections.abc import Callable

from cask.domain.model import EntityType
from cask.interfaces.errors import DuplicateRecordError, MissingReferenceError
from cask.interfaces.unit_of_work import AbstractUnitOfWork
from cask.service_layer import commands
from cask.service_layer.errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def _required(value: str, what: str) -> str:
    if not (trimmed := value.strip()):
        raise InvalidInputError(f"{what} is required")
    return trimmed


def create_entity(cmd: commands.CreateEntity, uow: AbstractUnitOfWork) -> int:
    """Register an entity and return its id."""
    name = _required(cmd.name, "Name")
    try:
        types = [EntityType(t) for t in cmd.types]
    except ValueError as e:
        raise InvalidInputError(f"Unknown entity type in {list(cmd.types)}") from e

    with uow:
        try:
            entity_id = uow.catalog.add_entity(
                name, types, country=cmd.country, region=cmd.region
            )
        except DuplicateRecordError as e:
            raise ConflictError(f"Entity '{name}' already exists") from e
        uow.commit()

    logger.info("Created entity %s (%s)", entity_id, name)
    return entity_id


def create_bottle(cmd: commands.CreateBottle, uow: AbstractUnitOfWork) -> int:
    """Add a bottle to the catalog and return its id.

    Every entity the bottle implicates (brand and distillers) has its
    ``total_bottles`` counter incremented in the same unit of work.

    Raises:
        InvalidInputError: If the name is blank or the stated age negative.
        NotFoundError: If the brand, a distiller or the bottler is unknown.
        ConflictError: If a bottle with the same name exists.
    """
    name = _required(cmd.name, "Name")
    if cmd.stated_age is not None and cmd.stated_age < 0:
        raise InvalidInputError("Stated age cannot be negative")

    with uow:
        if uow.catalog.get_entity(cmd.brand_id) is None:
            raise NotFoundError("Could not identify brand")
        try:
            bottle_id = uow.catalog.add_bottle(
                name,
                cmd.brand_id,
                category=cmd.category,
                stated_age=cmd.stated_age,
                distiller_ids=cmd.distiller_ids,
                bottler_id=cmd.bottler_id,
            )
        except DuplicateRecordError as e:
            raise ConflictError(f"Bottle '{name}' already exists") from e
        except MissingReferenceError as e:
            raise NotFoundError("Could not identify distiller or bottler") from e

        implicated = list(dict.fromkeys([cmd.brand_id, *cmd.distiller_ids]))
        uow.catalog.increment_entity_bottles(implicated)
        uow.commit()

    logger.info("Created bottle %s (%s)", bottle_id, name)
    return bottle_id


def create_user(cmd: commands.CreateUser, uow: AbstractUnitOfWork) -> int:
    """Register a user and return their id."""
    username = _required(cmd.username, "Username")
    email = _required(cmd.email, "Email")
    if "@" not in email:
        raise InvalidInputError("Email is invalid")

    with uow:
        try:
            user_id = uow.users.add(
                username,
                email,
                display_name=cmd.display_name,
                notify_comments=cmd.notify_comments,
            )
        except DuplicateRecordError as e:
            raise ConflictError("Username or email already in use") from e
        uow.commit()

    logger.info("Created user %s (%s)", user_id, username)
    return user_id


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateEntity: create_entity,
    commands.CreateBottle: create_bottle,
    commands.CreateUser: create_user,
}
