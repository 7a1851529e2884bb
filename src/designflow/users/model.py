from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Entidade de domínio: User.

    Obs.: objeto de dados puro (sem código de acesso ao banco).
    """

    user_id: str
    name: str
    password_hash: str
    role: Role
    avatar_url: Optional[str] = None
    avatar_color: Optional[str] = None
    active: bool = True


@dataclass(frozen=True)
class UserChanges:
    """Partial update: ``None`` keeps the stored value."""

    name: Optional[str] = None
    password_hash: Optional[str] = None
    active: Optional[bool] = None
    avatar_color: Optional[str] = None
    avatar_url: Optional[str] = None
