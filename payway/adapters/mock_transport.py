"""
Transporte mock para desarrollo y testing.
Registra los requests y devuelve respuestas predefinidas sin tocar la red.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

import structlog

from payway.adapters.base import Transport, TransportResponse, TransportResponseError


logger = structlog.get_logger(__name__)


@dataclass
class RecordedRequest:
    """Request capturado por el MockTransport."""

    path: str
    fields: dict[str, str | bytes]


class MockTransport(Transport):
    """
    Transporte en memoria.

    - body / status_code: respuesta fija
    - handler: callable(path, fields) que retorna un body o un
      TransportResponse
    - error: excepción a lanzar en cada envío

    Útil para desarrollo local y tests sin credenciales reales.
    """

    def __init__(
        self,
        body: Any = None,
        status_code: int = 200,
        handler: Callable[[str, dict[str, str | bytes]], Any] | None = None,
        error: BaseException | None = None,
    ):
        self.body = {} if body is None else body
        self.status_code = status_code
        self.handler = handler
        self.error = error
        self.requests: list[RecordedRequest] = []

    @property
    def last_request(self) -> RecordedRequest | None:
        return self.requests[-1] if self.requests else None

    def clear_requests(self) -> None:
        self.requests.clear()

    async def send(
        self,
        path: str,
        fields: Mapping[str, str | bytes],
    ) -> TransportResponse:
        request = RecordedRequest(path=path, fields=dict(fields))
        self.requests.append(request)

        logger.debug("Mock request recorded", path=path, fields=list(request.fields))

        if self.error is not None:
            raise self.error

        if self.handler is not None:
            result = self.handler(path, request.fields)
            if isinstance(result, TransportResponse):
                response = result
            else:
                response = TransportResponse(status_code=self.status_code, body=result)
        else:
            response = TransportResponse(status_code=self.status_code, body=self.body)

        if response.is_error:
            raise TransportResponseError(response)

        return response
