"""
Factory para obtener el transporte correcto.
"""

from typing import Any

import structlog

from payway.adapters.base import Transport
from payway.adapters.httpx_transport import HttpxTransport
from payway.adapters.mock_transport import MockTransport


logger = structlog.get_logger(__name__)


# Registro de transportes disponibles
TRANSPORTS: dict[str, type[Transport]] = {
    "httpx": HttpxTransport,
    "mock": MockTransport,
}


def get_transport(name: str, **kwargs: Any) -> Transport:
    """
    Obtiene un transporte por nombre.

    Args:
        name: Nombre del transporte ("httpx", "mock")
        **kwargs: Argumentos del constructor del transporte

    Returns:
        Instancia del Transport

    Raises:
        ValueError: Si el transporte no está soportado
    """
    name = name.lower()

    if name not in TRANSPORTS:
        raise ValueError(
            f"Transport '{name}' not supported. "
            f"Available: {list(TRANSPORTS.keys())}"
        )

    transport = TRANSPORTS[name](**kwargs)

    logger.info("Transport initialized", transport=name)

    return transport
