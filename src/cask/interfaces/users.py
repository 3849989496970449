"""User store interface."""

from __future__ import annotations

import abc
from collections.abc import Iterable

from cask.domain.model import User


class UserStore(abc.ABC):
    """Registered users."""

    @abc.abstractmethod
    def add(
        self,
        username: str,
        email: str,
        display_name: str | None = None,
        notify_comments: bool = True,
    ) -> int:
        """Insert a user and return their id.

        Raises:
            DuplicateRecordError: If the username or email is taken.
        """

    @abc.abstractmethod
    def get(self, user_id: int) -> User | None:
        """Return the user with the given id, or ``None``."""

    @abc.abstractmethod
    def get_many(self, user_ids: Iterable[int]) -> list[User]:
        """Return the users with the given ids, ordered by id."""
