"""
Interfaz base abstracta para transportes HTTP.
Define el contrato que el cliente usa para enviar los requests firmados.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class TransportResponse:
    """
    Respuesta de un transporte.

    body es el JSON decodificado (o el texto si no era JSON).
    """

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


class TransportFailure(Exception):
    """Error base de un transporte."""


class TransportResponseError(TransportFailure):
    """Se recibió una respuesta con estado de error."""

    def __init__(self, response: TransportResponse, message: str | None = None):
        self.response = response
        super().__init__(message or f"Request failed with status code {response.status_code}")


class NoResponseError(TransportFailure):
    """El request se envió pero no llegó respuesta (timeout, conexión cortada)."""


class RequestSetupError(TransportFailure):
    """El request no se pudo construir o enviar."""


class Transport(ABC):
    """
    Interfaz abstracta para transportes.

    El cliente solo necesita "enviar un POST multipart y obtener estado
    y body". Pooling, TLS y timeouts son responsabilidad de cada
    implementación.
    """

    @abstractmethod
    async def send(
        self,
        path: str,
        fields: Mapping[str, str | bytes],
    ) -> TransportResponse:
        """
        Envía los campos firmados como multipart/form-data.

        Args:
            path: Ruta relativa al base_url
            fields: Campos en orden de transmisión

        Returns:
            TransportResponse con estado y body

        Raises:
            TransportResponseError: Respuesta con estado de error
            NoResponseError: No se recibió respuesta
            RequestSetupError: No se pudo enviar el request
        """
        pass

    async def aclose(self) -> None:
        """Libera los recursos del transporte."""
        return None
