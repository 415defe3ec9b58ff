"""
Normalización y codificación de valores antes de firmarlos y enviarlos.
"""

import base64
import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


def trim(value: Any) -> Any:
    """
    Elimina espacios al inicio y al final de un string.

    Cualquier otro valor (None, números, NaN, objetos) se retorna
    sin cambios: el mismo objeto, nunca convertido a string.
    """
    if isinstance(value, str):
        return value.strip()
    return value


def base64_encode(value: str | bytes) -> str:
    """Codifica en base64 estándar (con padding). Los strings se codifican en UTF-8."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return base64.b64encode(value).decode("ascii")


def to_json(value: Any) -> str:
    """
    Serializa un valor estructurado a JSON compacto.

    Los modelos pydantic se vuelcan sin campos None. Decimal y otros
    tipos no serializables se convierten con str().
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", exclude_none=True)
    elif isinstance(value, list):
        value = [
            item.model_dump(mode="json", exclude_none=True)
            if isinstance(item, BaseModel) else item
            for item in value
        ]
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def encode_structured(value: Any) -> str | None:
    """
    Codifica en base64 un campo que puede ser texto o estructura.

    - None se mantiene None (el campo no se envía)
    - str / bytes se codifican directamente
    - cualquier otra cosa se serializa a JSON y luego se codifica
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes)):
        return base64_encode(value)
    return base64_encode(to_json(value))


def stringify(value: Any) -> str:
    """
    Convierte un valor a su forma de texto para el hash y el body.

    None se convierte en string vacío: es la regla del hash, que nunca
    descarta posiciones.
    """
    if value is None:
        return ""
    if isinstance(value, str) and not isinstance(value, Enum):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        # 100.0 se envía como "100"
        return str(int(value))
    if isinstance(value, (dict, list, tuple, BaseModel)):
        return to_json(value)
    return str(value)
