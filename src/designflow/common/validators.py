from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} inválido")
    return str(value).strip()


def require_non_negative_int(value: Any, field_name: str, *, default: Optional[int] = None) -> int:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} é obrigatório")
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")
    if number != value and not isinstance(value, str):
        # floats like 2.5 are not accepted as quantities
        raise ValidationError(f"{field_name} inválido")
    if number < 0:
        raise ValidationError(f"{field_name} não pode ser negativo")
    return number


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} inválido")
    return value
