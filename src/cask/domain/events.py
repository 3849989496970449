"""Events"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    Events are recorded on the unit of work and only released to event
    handlers once the transaction that produced them has committed.
    """


@dataclass(frozen=True, slots=True)
class TastingCreated(DomainEvent):
    """Event indicating that a tasting has been recorded."""

    tasting_id: int
    bottle_id: int
    user_id: int
    badge_ids: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class CommentAdded(DomainEvent):
    """Event indicating that a comment has been left on a tasting."""

    comment_id: int
    tasting_id: int
    user_id: int
