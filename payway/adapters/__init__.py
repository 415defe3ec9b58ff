"""
Transportes HTTP para el cliente de PayWay.
Implementación del patrón Adapter para abstraer el stack de red.
"""

from payway.adapters.base import (
    NoResponseError,
    RequestSetupError,
    Transport,
    TransportFailure,
    TransportResponse,
    TransportResponseError,
)
from payway.adapters.httpx_transport import HttpxTransport
from payway.adapters.mock_transport import MockTransport, RecordedRequest
from payway.adapters.factory import get_transport

__all__ = [
    "Transport",
    "TransportResponse",
    "TransportFailure",
    "TransportResponseError",
    "NoResponseError",
    "RequestSetupError",
    "HttpxTransport",
    "MockTransport",
    "RecordedRequest",
    "get_transport",
]
