from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_id
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_USER_PASSWORD
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User, UserChanges
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _parse_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Perfil de usuário inválido")


# bcryptjs hashes written by the previous Node backend
LEGACY_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def is_legacy_hash(password_hash: str) -> bool:
    return (password_hash or "").startswith(LEGACY_BCRYPT_PREFIXES)


def _password_matches(password_hash: str, password: str) -> bool:
    if is_legacy_hash(password_hash):
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # placeholder or corrupted hashes (e.g. legacy plaintext rows)
        return False


class AuthService:
    """Use case: authenticate user (login) and change password."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, name: str, password: str) -> User:
        name = optional_text(name, "Nome") or ""
        password = optional_text(password, "Senha") or ""

        user = self._users.get_active_by_name(name.strip())
        if not user:
            raise AuthenticationError("Usuário não encontrado")

        if not _password_matches(user.password_hash, password):
            logger.info("failed login for user %s", user.user_id)
            raise AuthenticationError("Senha incorreta")

        if is_legacy_hash(user.password_hash):
            self._users.update_user(user.user_id, UserChanges(password_hash=generate_password_hash(password)))
            logger.info("upgraded legacy password hash for user %s", user.user_id)

        return user

    def change_password(self, *, user_id: str, old_password: str, new_password: str) -> None:
        old_password = optional_text(old_password, "Senha atual")
        new_password = optional_text(new_password, "Nova senha")
        if not user_id or not old_password or not new_password:
            raise ValidationError("Dados incompletos")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")

        if not _password_matches(user.password_hash, old_password):
            raise AuthenticationError("Senha atual incorreta")

        self._users.update_user(user_id, UserChanges(password_hash=generate_password_hash(new_password)))


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def list_designers(self) -> Sequence[User]:
        return self._users.list_designers()

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Usuário não encontrado")
        return user

    def create_user(
        self,
        *,
        name: str,
        password: Optional[str] = None,
        role: Any = None,
        avatar_color: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        name = require_non_empty(optional_text(name, "Nome"), "Nome")
        password = optional_text(password, "Senha")
        user = User(
            user_id=new_id("user"),
            name=name,
            password_hash=generate_password_hash(password or DEFAULT_USER_PASSWORD),
            role=_parse_role(role) if role else Role.DESIGNER,
            avatar_url=avatar_url,
            avatar_color=avatar_color,
            active=True,
        )
        self._users.create_user(user)
        logger.info("created user %s (%s)", user.user_id, user.role.value)
        return user

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        password: Optional[str] = None,
        active: Optional[bool] = None,
        avatar_color: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> None:
        if name is not None:
            name = require_non_empty(optional_text(name, "Nome"), "Nome")
        password = optional_text(password, "Senha")
        if active is not None and not isinstance(active, bool):
            raise ValidationError("Campo active inválido")

        changes = UserChanges(
            name=name,
            password_hash=generate_password_hash(password) if password else None,
            active=active,
            avatar_color=avatar_color,
            avatar_url=avatar_url,
        )
        if not self._users.update_user(user_id, changes):
            raise NotFoundError("Usuário não encontrado")

    def delete_user(self, user_id: str, *, cascade: bool = False) -> None:
        """Soft-delete by default; ``cascade`` removes the user and all their data."""

        if cascade:
            removed = self._users.delete_cascade(user_id)
            logger.warning("cascade delete of user %s", user_id)
        else:
            removed = self._users.deactivate(user_id)
        if not removed:
            raise NotFoundError("Usuário não encontrado")
