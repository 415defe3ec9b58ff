"""
Cliente Python para la pasarela de pagos PayWay.
"""

from payway.adapters import HttpxTransport, MockTransport, Transport, TransportResponse
from payway.client import PayWayClient
from payway.schemas import (
    CheckTransactionParams,
    CreateTransactionParams,
    Currency,
    DeeplinkConfig,
    PaymentOption,
    TransactionListParams,
    TransactionStatus,
)
from payway.utils import (
    GatewayError,
    GatewayTransportError,
    PayloadSigner,
    PayWayError,
    PayWayRequestError,
    PayWayValidationError,
    trim,
)

__version__ = "1.0.0"

__all__ = [
    "PayWayClient",
    "PayloadSigner",
    "trim",
    # Transportes
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    "MockTransport",
    # Schemas
    "Currency",
    "PaymentOption",
    "TransactionStatus",
    "DeeplinkConfig",
    "CreateTransactionParams",
    "CheckTransactionParams",
    "TransactionListParams",
    # Errores
    "PayWayError",
    "PayWayRequestError",
    "PayWayValidationError",
    "GatewayError",
    "GatewayTransportError",
]
