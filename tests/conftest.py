"""
Configuración de tests y fixtures compartidos.
"""

from datetime import datetime, timezone

import pytest

from payway.adapters.mock_transport import MockTransport
from payway.client import PayWayClient


BASE_URL = "https://checkout-sandbox.payway.com.kh"
MERCHANT_ID = "ec000002"
API_KEY = "test-api-key-do-not-leak"

# req_time fijo para que el hash sea reproducible
FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
FIXED_REQ_TIME = "20240102030405"


@pytest.fixture
def mock_transport() -> MockTransport:
    """Transporte mock que responde 200 con un body vacío."""
    return MockTransport()


@pytest.fixture
def client(mock_transport: MockTransport) -> PayWayClient:
    """Cliente con reloj fijo y transporte mock."""
    return PayWayClient(
        BASE_URL,
        MERCHANT_ID,
        API_KEY,
        transport=mock_transport,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def sample_transaction_data() -> dict:
    """Parámetros mínimos válidos para crear una transacción."""
    return {
        "tran_id": "order-123",
        "payment_option": "abapay",
        "amount": 100,
        "currency": "USD",
    }
