"""
Utilidades para firmas HMAC-SHA512.
Usadas para firmar los requests enviados a PayWay.
"""

import base64
import hashlib
import hmac
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import structlog
from pydantic import SecretStr

from payway.utils.encoding import stringify


logger = structlog.get_logger(__name__)

# Formato yyyyMMddHHmmss exigido para req_time
REQ_TIME_FORMAT = "%Y%m%d%H%M%S"


def _secret_value(secret: str | SecretStr) -> str:
    if isinstance(secret, SecretStr):
        return secret.get_secret_value()
    return secret


def create_hash(values: Iterable[str], secret: str | SecretStr) -> str:
    """
    Genera el hash HMAC-SHA512 de una lista de valores.

    Los valores se concatenan sin separador, en el orden recibido.

    Args:
        values: Valores a firmar (el orden es parte del protocolo)
        secret: API key del merchant

    Returns:
        Firma en base64 (alfabeto estándar, con padding)
    """
    data = "".join(values)
    digest = hmac.new(
        _secret_value(secret).encode("utf-8"),
        data.encode("utf-8"),
        hashlib.sha512,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_hash(
    values: Iterable[str],
    secret: str | SecretStr,
    expected: str,
) -> bool:
    """
    Verifica un hash recalculándolo sobre los mismos valores.

    Returns:
        True si la firma es válida
    """
    return hmac.compare_digest(create_hash(values, secret), expected)


def format_req_time(moment: datetime) -> str:
    """
    Formatea un datetime como yyyyMMddHHmmss.

    Los datetimes con zona horaria se convierten a UTC; los naive
    se usan tal cual.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(REQ_TIME_FORMAT)


def filter_present(body: Mapping[str, Any]) -> dict[str, Any]:
    """Descarta los campos None. False, 0 y "" se conservan."""
    return {key: value for key, value in body.items() if value is not None}


def _field_value(value: Any) -> str | bytes:
    if isinstance(value, bytes):
        return value
    return stringify(value)


def build_signed_fields(
    secret: str | SecretStr,
    merchant_id: str,
    hash_values: Iterable[Any],
    body: Mapping[str, Any],
    timestamp: datetime,
) -> dict[str, str | bytes]:
    """
    Construye los campos firmados de un request.

    El orden del resultado es el orden de transmisión:
    req_time, merchant_id, campos del body (sin los None) y hash al final.

    El hash se calcula sobre [req_time, merchant_id, *hash_values]. Ese
    orden lo define quien llama; aquí no se infiere del body.

    Args:
        secret: API key del merchant
        merchant_id: ID del merchant
        hash_values: Valores del hash en el orden del protocolo
        body: Campos a transmitir, en orden de envío
        timestamp: Momento usado para req_time

    Returns:
        Dict ordenado con los campos a enviar
    """
    present = filter_present(body)
    req_time = format_req_time(timestamp)

    hash_value = create_hash(
        [req_time, merchant_id, *(stringify(value) for value in hash_values)],
        secret,
    )

    fields: dict[str, str | bytes] = {
        "req_time": req_time,
        "merchant_id": merchant_id,
    }
    for key, value in present.items():
        fields[key] = _field_value(value)
    fields["hash"] = hash_value

    logger.debug(
        "Signed request fields built",
        req_time=req_time,
        fields=list(fields.keys()),
        dropped=[key for key in body if key not in present],
    )

    return fields


class PayloadSigner:
    """
    Firma payloads con las credenciales de un merchant.

    No guarda estado por request: cada llamada a sign() construye
    sus propios campos.
    """

    def __init__(self, merchant_id: str, api_key: str | SecretStr):
        self.merchant_id = merchant_id
        self._api_key = api_key if isinstance(api_key, SecretStr) else SecretStr(api_key)

    def __repr__(self) -> str:
        return f"PayloadSigner(merchant_id={self.merchant_id!r}, api_key='**********')"

    def create_hash(self, values: Iterable[str]) -> str:
        return create_hash(values, self._api_key)

    def sign(
        self,
        hash_values: Iterable[Any],
        body: Mapping[str, Any],
        timestamp: datetime,
    ) -> dict[str, str | bytes]:
        return build_signed_fields(
            self._api_key,
            self.merchant_id,
            hash_values,
            body,
            timestamp,
        )
