"""SQLAlchemy implementation of the user store."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from cask.adapters.db.schema import user
from cask.domain.model import User
from cask.interfaces.errors import DuplicateRecordError
from cask.interfaces.users import UserStore

from ._errors import is_unique_violation

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, RowMapping


def _user_from_row(row: RowMapping) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        display_name=row["display_name"],
        notify_comments=bool(row["notify_comments"]),
    )


class SqlAlchemyUserStore(UserStore):
    """User store backed by the ``user`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def add(
        self,
        username: str,
        email: str,
        display_name: str | None = None,
        notify_comments: bool = True,
    ) -> int:
        stmt = insert(user).values(
            username=username,
            email=email,
            display_name=display_name,
            notify_comments=notify_comments,
        )
        try:
            result = self.connection.execute(stmt)
        except IntegrityError as e:
            if is_unique_violation(e, "user", ["username"]):
                raise DuplicateRecordError("user", username) from e
            if is_unique_violation(e, "user", ["email"]):
                raise DuplicateRecordError("user", email) from e
            raise
        return int(result.inserted_primary_key[0])

    def get(self, user_id: int) -> User | None:
        row = (
            self.connection.execute(select(user).where(user.c.id == user_id))
            .mappings()
            .one_or_none()
        )
        return _user_from_row(row) if row else None

    def get_many(self, user_ids: Iterable[int]) -> list[User]:
        ids = list(user_ids)
        if not ids:
            return []
        rows = self.connection.execute(
            select(user).where(user.c.id.in_(ids)).order_by(user.c.id)
        ).mappings()
        return [_user_from_row(row) for row in rows]
