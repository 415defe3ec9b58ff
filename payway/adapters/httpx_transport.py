"""
Transporte por defecto basado en httpx.
"""

from typing import Any, Mapping

import httpx
import structlog

from payway.adapters.base import (
    NoResponseError,
    RequestSetupError,
    Transport,
    TransportResponse,
    TransportResponseError,
)


logger = structlog.get_logger(__name__)

# Timeout por defecto para requests a PayWay
DEFAULT_TIMEOUT_SECONDS = 30.0

USER_AGENT = "payway-python/1.0"


class HttpxTransport(Transport):
    """
    Transporte HTTPS multipart sobre httpx.AsyncClient.

    El cliente HTTP se crea una vez, ligado al base_url, y se reutiliza
    en todas las llamadas.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            base_url: URL base de la API de PayWay
            timeout: Timeout en segundos
            client: AsyncClient ya configurado (opcional)
        """
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
        )

    @staticmethod
    def _to_multipart(fields: Mapping[str, str | bytes]) -> list[tuple[str, tuple[None, bytes]]]:
        """Partes sin filename, en el orden recibido."""
        return [
            (name, (None, value.encode("utf-8") if isinstance(value, str) else value))
            for name, value in fields.items()
        ]

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def send(
        self,
        path: str,
        fields: Mapping[str, str | bytes],
    ) -> TransportResponse:
        try:
            response = await self._client.post(path, files=self._to_multipart(fields))
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            logger.warning("PayWay request got no response", path=path, error=str(e))
            raise NoResponseError(str(e)) from e
        except httpx.HTTPError as e:
            logger.warning("PayWay request could not be sent", path=path, error=str(e))
            raise RequestSetupError(str(e)) from e

        result = TransportResponse(
            status_code=response.status_code,
            body=self._decode_body(response),
            headers=dict(response.headers),
        )

        if response.is_error:
            raise TransportResponseError(
                result,
                f"Request failed with status code {response.status_code}",
            )

        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
