from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User, UserChanges


class UserRepository(Protocol):
    """Porta de persistência para User.

    A camada de serviço depende desta interface, não de um banco concreto.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def list_designers(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_active_by_name(self, name: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, user: User) -> None:
        raise NotImplementedError

    def update_user(self, user_id: str, changes: UserChanges) -> bool:
        raise NotImplementedError

    def deactivate(self, user_id: str) -> bool:
        raise NotImplementedError

    def delete_cascade(self, user_id: str) -> bool:
        """Remove the user and every row that references it, atomically."""

        raise NotImplementedError
