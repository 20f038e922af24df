"""Domain entity representing a caller known to the identity provider."""

from dataclasses import dataclass

from .role import Role

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
ROLE_VIEWER = "viewer"


@dataclass
class User:
    """Attributes needed to decide what a caller is permitted to do."""

    id: int | None
    role: Role
    name: str
    email: str
    is_active: bool

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def has_any_role(self, *aliases: str) -> bool:
        return any(self.has_role(alias) for alias in aliases)

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def can_edit_records(self) -> bool:
        return self.has_any_role(ROLE_ADMIN, ROLE_EDITOR)


__all__ = ["ROLE_ADMIN", "ROLE_EDITOR", "ROLE_VIEWER", "User"]
