"""
Cliente de la API de PayWay.

Cada operación valida los parámetros, calcula el orden del hash que
exige PayWay, firma el payload y lo envía por el transporte inyectado.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import structlog
from pydantic import SecretStr

from payway.adapters.base import NoResponseError, Transport, TransportResponseError
from payway.adapters.factory import get_transport
from payway.adapters.httpx_transport import DEFAULT_TIMEOUT_SECONDS, HttpxTransport
from payway.config import Settings, get_settings
from payway.schemas import (
    CheckTransactionParams,
    CreateTransactionParams,
    ParamsSchema,
    TransactionListParams,
    validate_params,
)
from payway.utils.exceptions import PayWayError, PayWayRequestError
from payway.utils.hmac_utils import PayloadSigner


logger = structlog.get_logger(__name__)

# Endpoints de PayWay
PURCHASE_PATH = "/api/payment-gateway/v1/payments/purchase"
CHECK_TRANSACTION_PATH = "/api/payment-gateway/v1/payments/check-transaction"
TRANSACTION_LIST_PATH = "/api/payment-gateway/v1/payments/transaction-list"


@dataclass(frozen=True)
class Credentials:
    """Credenciales del merchant. La API key nunca se muestra en repr."""

    base_url: str
    merchant_id: str
    api_key: SecretStr


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(body: Any, fallback: str | None) -> str:
    """Mensaje del body (`message` o `status.message`), si no el del transporte."""
    message = None
    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("status"), dict):
            message = body["status"].get("message")
    return message or fallback or "Unknown error"


class PayWayClient:
    """
    Cliente asíncrono para la API de PayWay.

    Es seguro usarlo desde varias corrutinas a la vez: el estado de cada
    request (hash, campos firmados, req_time) se construye en la propia
    llamada y nunca se guarda en la instancia.

    Uso:
        async with PayWayClient(base_url, merchant_id, api_key) as client:
            data = await client.check_transaction("order-123")
    """

    def __init__(
        self,
        base_url: str,
        merchant_id: str,
        api_key: str | SecretStr,
        transport: Transport | None = None,
        *,
        transport_factory: Callable[["PayWayClient"], Transport] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            base_url: URL base de la API de PayWay
            merchant_id: ID del merchant
            api_key: API key (clave del HMAC)
            transport: Transporte a usar (por defecto HttpxTransport)
            transport_factory: Callable que recibe el cliente y crea el transporte
            timeout: Timeout del transporte por defecto, en segundos
            clock: Función que retorna el datetime para req_time (UTC por defecto)
        """
        if not isinstance(api_key, SecretStr):
            api_key = SecretStr(api_key)

        self._credentials = Credentials(
            base_url=base_url,
            merchant_id=merchant_id,
            api_key=api_key,
        )
        self._signer = PayloadSigner(merchant_id, api_key)
        self._clock = clock or _utc_now

        if transport is not None:
            self._transport = transport
        elif transport_factory is not None:
            self._transport = transport_factory(self)
        else:
            self._transport = HttpxTransport(base_url, timeout=timeout)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        **kwargs: Any,
    ) -> "PayWayClient":
        """
        Crea un cliente a partir de la configuración (variables PAYWAY_*).

        Args:
            settings: Settings a usar (por defecto get_settings())
            **kwargs: Argumentos extra del constructor
        """
        settings = settings or get_settings()

        if "transport" not in kwargs and "transport_factory" not in kwargs:
            if settings.TRANSPORT == "httpx":
                kwargs["transport"] = get_transport(
                    "httpx",
                    base_url=settings.BASE_URL,
                    timeout=settings.TIMEOUT_SECONDS,
                )
            else:
                kwargs["transport"] = get_transport(settings.TRANSPORT)

        return cls(
            settings.BASE_URL,
            settings.MERCHANT_ID,
            settings.API_KEY,
            **kwargs,
        )

    def __repr__(self) -> str:
        return (
            f"PayWayClient(base_url={self.base_url!r}, "
            f"merchant_id={self.merchant_id!r})"
        )

    @property
    def base_url(self) -> str:
        return self._credentials.base_url

    @property
    def merchant_id(self) -> str:
        return self._credentials.merchant_id

    @property
    def transport(self) -> Transport:
        return self._transport

    async def aclose(self) -> None:
        """Cierra el transporte."""
        await self._transport.aclose()

    async def __aenter__(self) -> "PayWayClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ============================================
    # Firma
    # ============================================

    def create_hash(self, values: list[str]) -> str:
        """Hash HMAC-SHA512 en base64 de los valores concatenados."""
        return self._signer.create_hash(values)

    def create_payload(
        self,
        hash_values: list[Any],
        body: Mapping[str, Any] | None = None,
        date: datetime | None = None,
    ) -> dict[str, str | bytes]:
        """
        Construye los campos firmados de un request.

        Args:
            hash_values: Valores del hash en el orden del protocolo
            body: Campos a transmitir, en orden de envío
            date: Momento para req_time (por defecto el reloj del cliente)

        Returns:
            Dict ordenado: req_time, merchant_id, campos, hash
        """
        return self._signer.sign(
            hash_values,
            body or {},
            date if date is not None else self._clock(),
        )

    # ============================================
    # Operaciones
    # ============================================

    async def create_transaction(
        self,
        params: CreateTransactionParams | Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        """
        Crea una nueva transacción de pago.

        Los parámetros se pueden pasar como dict, como
        CreateTransactionParams o como keyword arguments.

        Args:
            tran_id: ID único de la transacción (requerido)
            payment_option: Método de pago, ej. "abapay_deeplink" (requerido)
            amount: Monto, número o string numérico (requerido)
            currency: "USD" o "KHR" (requerido)
            return_url: URL de retorno (se codifica en base64)
            return_deeplink: Deeplink str o DeeplinkConfig (se codifica en base64)
            continue_success_url: URL para continuar tras un pago exitoso
            pwt: Tipo de ventana de pago
            firstname, lastname, email, phone: Datos del cliente (se recortan)
            items: Items de la orden, str o lista (se codifica en base64)
            type: Tipo de transacción (por defecto "purchase")
            custom_fields: Campos personalizados

        Returns:
            Body de la respuesta de PayWay, sin transformar

        Raises:
            PayWayValidationError: Si faltan parámetros o son inválidos
            PayWayError: Si PayWay responde con error
            PayWayRequestError: Si no hubo respuesta o el request falló
        """
        validated = validate_params(
            CreateTransactionParams,
            "create_transaction",
            self._merge_params(params, kwargs),
        )
        return await self._post(
            "create_transaction",
            PURCHASE_PATH,
            validated,
            tran_id=validated.tran_id,
        )

    async def check_transaction(self, tran_id: str) -> Any:
        """
        Consulta el estado de una transacción.

        Args:
            tran_id: ID de la transacción

        Returns:
            Body de la respuesta de PayWay, sin transformar

        Raises:
            PayWayValidationError: Si tran_id está vacío o no es string
            PayWayError: Si PayWay responde con error
            PayWayRequestError: Si no hubo respuesta o el request falló
        """
        validated = validate_params(
            CheckTransactionParams,
            "check_transaction",
            {"tran_id": tran_id},
        )
        return await self._post(
            "check_transaction",
            CHECK_TRANSACTION_PATH,
            validated,
            tran_id=validated.tran_id,
        )

    async def transaction_list(
        self,
        params: TransactionListParams | Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> Any:
        """
        Lista transacciones según filtros (todos opcionales).

        Args:
            from_date: Fecha inicial, string YYYYMMDD
            to_date: Fecha final, string YYYYMMDD
            from_amount: Monto mínimo
            to_amount: Monto máximo
            status: Estado, ej. "APPROVED"

        Returns:
            Body de la respuesta de PayWay, sin transformar
        """
        validated = validate_params(
            TransactionListParams,
            "transaction_list",
            self._merge_params(params, kwargs),
        )
        return await self._post("transaction_list", TRANSACTION_LIST_PATH, validated)

    # ============================================
    # Internos
    # ============================================

    @staticmethod
    def _merge_params(
        params: ParamsSchema | Mapping[str, Any] | None,
        kwargs: dict[str, Any],
    ) -> ParamsSchema | dict[str, Any]:
        if isinstance(params, ParamsSchema) and not kwargs:
            return params
        if isinstance(params, ParamsSchema):
            params = params.model_dump()
        return {**(params or {}), **kwargs}

    async def _post(
        self,
        operation: str,
        path: str,
        params: ParamsSchema,
        **log_context: Any,
    ) -> Any:
        """Firma, envía y mapea la respuesta o el error."""
        start_time = time.time()

        try:
            fields = self.create_payload(params.hash_values(), params.body_fields())
            response = await self._transport.send(path, fields)

        except TransportResponseError as e:
            raise self._api_error(
                operation,
                e.response.body,
                e.response.status_code,
                str(e),
                **log_context,
            ) from e

        except NoResponseError as e:
            logger.error(
                "PayWay network error",
                operation=operation,
                error=str(e),
                **log_context,
            )
            raise PayWayRequestError(
                "Network error: No response received from PayWay API",
                e,
            ) from e

        except PayWayError:
            raise

        except Exception as e:
            logger.error(
                "PayWay request error",
                operation=operation,
                error=str(e),
                **log_context,
            )
            raise PayWayRequestError(f"Request error: {e}", e) from e

        duration_ms = int((time.time() - start_time) * 1000)

        if response.is_error:
            raise self._api_error(
                operation,
                response.body,
                response.status_code,
                None,
                **log_context,
            )

        logger.info(
            "PayWay request completed",
            operation=operation,
            status_code=response.status_code,
            duration_ms=duration_ms,
            **log_context,
        )

        return response.body

    @staticmethod
    def _api_error(
        operation: str,
        body: Any,
        status_code: int,
        transport_message: str | None,
        **log_context: Any,
    ) -> PayWayError:
        error = PayWayError(
            f"PayWay API error: {_error_message(body, transport_message)}",
            body,
            status_code,
        )

        logger.warning(
            "PayWay API error",
            operation=operation,
            status_code=status_code,
            error_code=error.error_code,
            **log_context,
        )

        return error
