"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session, joinedload

from formvault.domain.entities import Role, User
from formvault.infrastructure.models import UserModel


class UserRepository:
    """Look up the local mirror of identity provider accounts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=Role(id=model.role.id, name=model.role.name, alias=model.role.alias),
            name=model.name,
            email=model.email,
            is_active=bool(model.is_active),
        )


__all__ = ["UserRepository"]
