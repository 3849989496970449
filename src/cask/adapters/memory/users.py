"""In-memory UserStore implementation for testing purposes."""

from __future__ import annotations

from collections.abc import Iterable

from cask.domain.model import User
from cask.interfaces.errors import DuplicateRecordError
from cask.interfaces.users import UserStore

from .data import InMemoryData


class InMemoryUserStore(UserStore):
    """In-memory implementation of the UserStore interface."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def add(
        self,
        username: str,
        email: str,
        display_name: str | None = None,
        notify_comments: bool = True,
    ) -> int:
        for existing in self._data.users.values():
            if existing.username == username:
                raise DuplicateRecordError("user", username)
            if existing.email == email:
                raise DuplicateRecordError("user", email)
        user_id = self._data.next_id("user")
        self._data.users[user_id] = User(
            id=user_id,
            username=username,
            email=email,
            display_name=display_name,
            notify_comments=notify_comments,
        )
        return user_id

    def get(self, user_id: int) -> User | None:
        return self._data.users.get(user_id)

    def get_many(self, user_ids: Iterable[int]) -> list[User]:
        return [self._data.users[i] for i in sorted(set(user_ids)) if i in self._data.users]
