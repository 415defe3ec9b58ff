"""
Schemas de parámetros de PayWay.
"""

from payway.schemas.common import BaseSchema, ParamsSchema, validate_params
from payway.schemas.transaction import (
    CheckTransactionParams,
    CreateTransactionParams,
    Currency,
    DeeplinkConfig,
    PaymentOption,
    TransactionListParams,
    TransactionStatus,
)

__all__ = [
    "BaseSchema",
    "ParamsSchema",
    "validate_params",
    "Currency",
    "PaymentOption",
    "TransactionStatus",
    "DeeplinkConfig",
    "CreateTransactionParams",
    "CheckTransactionParams",
    "TransactionListParams",
]
