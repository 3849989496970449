"""Errors raised by store implementations."""


class StoreError(Exception):
    """Base class for store errors."""


class DuplicateRecordError(StoreError):
    """Raised when an insert collides with an existing record's unique key.

    Attributes:
        kind (str): The record kind (e.g. "bottle", "badge").
        key (str): The colliding natural key, rendered for humans.
    """

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} ({key}) already exists.")
        self.kind = kind
        self.key = key


class DuplicateTastingError(DuplicateRecordError):
    """Raised when a user already has a tasting of a bottle at the same time bucket."""

    def __init__(self, bottle_id: int, user_id: int) -> None:
        super().__init__("tasting", f"bottle={bottle_id}, user={user_id}")
        self.bottle_id = bottle_id
        self.user_id = user_id


class MissingReferenceError(StoreError):
    """Raised when a write references a record that does not exist."""

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
