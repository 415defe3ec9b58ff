"""
Schemas base y conversión de errores de validación.
"""

from abc import abstractmethod
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from payway.utils.exceptions import PayWayValidationError


# TypeVar para los modelos de parámetros
P = TypeVar("P", bound="ParamsSchema")


class BaseSchema(BaseModel):
    """Schema base con configuración común."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )


class ParamsSchema(BaseSchema):
    """
    Base de los parámetros de una operación.

    Cada operación define dos órdenes distintos: el de los valores del
    hash y el de los campos transmitidos.
    """

    model_config = ConfigDict(extra="forbid")

    @abstractmethod
    def hash_values(self) -> list[str]:
        """Valores del hash como strings, None convertido en ""."""
        pass

    @abstractmethod
    def body_fields(self) -> dict[str, Any]:
        """Campos a transmitir, en orden de envío."""
        pass


def _describe_error(error: dict[str, Any]) -> tuple[str, str | None]:
    """Retorna (mensaje, campo) de un error de pydantic."""
    field = ".".join(str(part) for part in error.get("loc", ())) or None

    if error.get("type") == "value_error":
        # Mensaje propio lanzado desde un validator
        cause = error["ctx"]["error"]
        if isinstance(cause, PayWayValidationError):
            return cause.message, cause.field or field
        return str(cause), field

    if field:
        return f"{field}: {error['msg']}", field
    return error["msg"], field


def validate_params(
    model: type[P],
    operation: str,
    data: P | Mapping[str, Any] | None,
) -> P:
    """
    Construye y valida los parámetros de una operación.

    Args:
        model: Clase del schema de parámetros
        operation: Nombre de la operación (prefijo del mensaje)
        data: Instancia del schema, mapping o None

    Returns:
        Instancia validada del schema

    Raises:
        PayWayValidationError: Si algún parámetro es inválido
    """
    if isinstance(data, model):
        return data

    raw = dict(data or {})

    try:
        return model.model_validate(raw)
    except ValidationError as e:
        message, field = _describe_error(e.errors()[0])

        tran_id = raw.get("tran_id")
        if field != "tran_id" and isinstance(tran_id, str) and tran_id:
            prefix = f"{operation} [tran_id={tran_id}]"
        else:
            prefix = operation

        raise PayWayValidationError(f"{prefix}: {message}", field=field) from e
