"""User persistence operations."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from analise_tributaria.db.models.user import User


class UserRepository:
    """Repository for login identities."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: int) -> User | None:
        return self._session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        statement = select(User).where(User.username == username).limit(1)
        return self._session.scalar(statement)

    def list_users(self, search: str | None = None) -> list[User]:
        statement = select(User)
        if search:
            statement = statement.where(User.username.ilike(f"%{search}%"))
        statement = statement.order_by(User.username.asc())
        return list(self._session.scalars(statement).all())

    def add(self, user: User) -> User:
        self._session.add(user)
        self._session.flush()
        return user
