"""Service layer handlers."""

from collections.abc import Callable

from .badge_handlers import COMMAND_HANDLERS as BADGE_COMMAND_HANDLERS
from .catalog_handlers import COMMAND_HANDLERS as CATALOG_COMMAND_HANDLERS
from .comment_handlers import COMMAND_HANDLERS as COMMENT_COMMAND_HANDLERS
from .comment_handlers import EVENT_HANDLERS as COMMENT_EVENT_HANDLERS
from .price_handlers import COMMAND_HANDLERS as PRICE_COMMAND_HANDLERS
from .tasting_handlers import COMMAND_HANDLERS as TASTING_COMMAND_HANDLERS
from .tasting_handlers import EVENT_HANDLERS as TASTING_EVENT_HANDLERS

__all__ = ["COMMAND_HANDLERS", "EVENT_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    **BADGE_COMMAND_HANDLERS,
    **CATALOG_COMMAND_HANDLERS,
    **COMMENT_COMMAND_HANDLERS,
    **PRICE_COMMAND_HANDLERS,
    **TASTING_COMMAND_HANDLERS,
}

EVENT_HANDLERS: dict[type, list[Callable[..., None]]] = {
    **COMMENT_EVENT_HANDLERS,
    **TASTING_EVENT_HANDLERS,
}
