"""
Excepciones del cliente de PayWay.
"""

from typing import Any


def _extract_error_code(response: Any) -> str | None:
    """Lee el código de error del body: `code` o `status.code`."""
    if not isinstance(response, dict):
        return None
    code = response.get("code")
    if code is None and isinstance(response.get("status"), dict):
        code = response["status"].get("code")
    return str(code) if code is not None else None


class PayWayError(Exception):
    """
    Error devuelto por la API de PayWay.

    Attributes:
        message: Mensaje legible
        error_code: Código de error de PayWay (si lo hay)
        status_code: Código HTTP
        details: Body completo de la respuesta de error
        response: Igual que details (compatibilidad)
    """

    def __init__(
        self,
        message: str,
        response: Any = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.error_code = _extract_error_code(response)
        self.status_code = status_code
        self.details = response
        self.response = response
        super().__init__(message)


class PayWayRequestError(PayWayError):
    """No se obtuvo respuesta de PayWay (red, timeout o error al construir el request)."""

    def __init__(self, message: str, original_error: BaseException | None = None):
        super().__init__(message)
        self.original_error = original_error


class PayWayValidationError(ValueError):
    """
    Parámetros inválidos.

    Se lanza antes de cualquier llamada de red, por eso no tiene
    error_code, status_code ni details.
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


GatewayError = PayWayError
GatewayTransportError = PayWayRequestError
