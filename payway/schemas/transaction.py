"""
Schemas para las operaciones de transacciones.
"""

import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar

from pydantic import ConfigDict, Field, field_validator, model_validator

from payway.schemas.common import BaseSchema, ParamsSchema
from payway.utils.encoding import base64_encode, encode_structured, stringify, trim
from payway.utils.exceptions import PayWayValidationError


class Currency(str, Enum):
    """Monedas soportadas por PayWay."""

    USD = "USD"
    KHR = "KHR"


class PaymentOption(str, Enum):
    """Métodos de pago."""

    CARDS = "cards"
    ABAPAY = "abapay"
    ABAPAY_DEEPLINK = "abapay_deeplink"
    ABAPAY_KHQR_DEEPLINK = "abapay_khqr_deeplink"
    WECHAT = "wechat"
    ALIPAY = "alipay"
    BAKONG = "bakong"


class TransactionStatus(str, Enum):
    """Estados de una transacción en PayWay."""

    APPROVED = "APPROVED"
    DECLINED = "DECLINED"
    PENDING = "PENDING"
    PRE_AUTH = "PRE-AUTH"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


SUPPORTED_CURRENCIES = (Currency.USD.value, Currency.KHR.value)

DEFAULT_TRANSACTION_TYPE = "purchase"


class DeeplinkConfig(BaseSchema):
    """Deeplink de retorno para apps móviles."""

    model_config = ConfigDict(extra="allow")

    android_scheme: str | None = None
    ios_scheme: str | None = None


def _is_valid_amount(amount: Any) -> bool:
    """Un número finito o un string numérico."""
    if isinstance(amount, bool):
        return False
    if isinstance(amount, int):
        return True
    if isinstance(amount, float):
        return math.isfinite(amount)
    if isinstance(amount, Decimal):
        return amount.is_finite()
    if isinstance(amount, str):
        try:
            return Decimal(amount.strip()).is_finite()
        except InvalidOperation:
            return False
    return False


def _require_tran_id(data: dict[str, Any]) -> None:
    tran_id = data.get("tran_id")
    if not tran_id or not isinstance(tran_id, str):
        raise PayWayValidationError(
            "tran_id is required and must be a string",
            field="tran_id",
        )


# ============================================
# create_transaction
# ============================================

class CreateTransactionParams(ParamsSchema):
    """Parámetros para crear una transacción (purchase)."""

    # Orden de los valores del hash: contrato con PayWay
    HASH_FIELDS: ClassVar[tuple[str, ...]] = (
        "tran_id",
        "amount",
        "items",
        "firstname",
        "lastname",
        "email",
        "phone",
        "type",
        "payment_option",
        "continue_success_url",
        "return_url",
        "return_deeplink",
        "currency",
        "custom_fields",
        "pwt",
    )

    # Orden de los campos transmitidos, independiente del hash
    BODY_FIELDS: ClassVar[tuple[str, ...]] = (
        "tran_id",
        "amount",
        "pwt",
        "firstname",
        "lastname",
        "email",
        "phone",
        "items",
        "type",
        "payment_option",
        "return_url",
        "continue_success_url",
        "return_deeplink",
        "currency",
        "custom_fields",
    )

    tran_id: str
    payment_option: str
    amount: Decimal | int | float | str
    currency: Currency

    return_url: str | None = None
    # dict antes que DeeplinkConfig: el JSON conserva el orden y los null del caller
    return_deeplink: dict[str, Any] | DeeplinkConfig | str | None = Field(
        default=None,
        union_mode="left_to_right",
    )
    continue_success_url: str | None = None
    pwt: str | None = None

    # Datos del cliente (se recortan si son strings)
    firstname: Any = None
    lastname: Any = None
    email: Any = None
    phone: Any = None

    items: str | list[Any] | dict[str, Any] | None = None
    type: str = DEFAULT_TRANSACTION_TYPE
    custom_fields: str | dict[str, Any] | list[Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        """Valida los campos obligatorios en el orden documentado."""
        if not isinstance(data, dict):
            return data

        _require_tran_id(data)

        payment_option = data.get("payment_option")
        if not payment_option or not isinstance(payment_option, str):
            raise PayWayValidationError(
                "payment_option is required and must be a string",
                field="payment_option",
            )

        amount = data.get("amount")
        if amount is None:
            raise PayWayValidationError("amount is required", field="amount")
        if not _is_valid_amount(amount):
            raise PayWayValidationError(
                "amount must be a number or a numeric string",
                field="amount",
            )

        if data.get("currency") not in SUPPORTED_CURRENCIES:
            raise PayWayValidationError(
                'currency is required and must be "USD" or "KHR"',
                field="currency",
            )

        return data

    @field_validator("firstname", "lastname", "email", "phone", mode="before")
    @classmethod
    def trim_customer_fields(cls, v):
        return trim(v)

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v):
        """None equivale a no enviar type."""
        if v is None:
            return DEFAULT_TRANSACTION_TYPE
        return v

    def _wire_values(self) -> dict[str, Any]:
        """Valores normalizados y codificados, listos para firmar."""
        return_url = self.return_url
        if isinstance(return_url, str):
            return_url = base64_encode(return_url)

        return {
            "tran_id": self.tran_id,
            "amount": self.amount,
            "pwt": self.pwt,
            "firstname": self.firstname,
            "lastname": self.lastname,
            "email": self.email,
            "phone": self.phone,
            "items": encode_structured(self.items),
            "type": self.type,
            "payment_option": self.payment_option,
            "return_url": return_url,
            "continue_success_url": self.continue_success_url,
            "return_deeplink": encode_structured(self.return_deeplink),
            "currency": self.currency,
            "custom_fields": self.custom_fields,
        }

    def hash_values(self) -> list[str]:
        values = self._wire_values()
        return [stringify(values[name]) for name in self.HASH_FIELDS]

    def body_fields(self) -> dict[str, Any]:
        values = self._wire_values()
        return {name: values[name] for name in self.BODY_FIELDS}


# ============================================
# check_transaction
# ============================================

class CheckTransactionParams(ParamsSchema):
    """Parámetros para consultar una transacción."""

    tran_id: str

    @model_validator(mode="before")
    @classmethod
    def check_required(cls, data: Any) -> Any:
        if isinstance(data, dict):
            _require_tran_id(data)
        return data

    def hash_values(self) -> list[str]:
        return [self.tran_id]

    def body_fields(self) -> dict[str, Any]:
        return {"tran_id": self.tran_id}


# ============================================
# transaction_list
# ============================================

class TransactionListParams(ParamsSchema):
    """Filtros para listar transacciones. Todos opcionales."""

    # Mismo orden para hash y body
    FIELDS: ClassVar[tuple[str, ...]] = (
        "from_date",
        "to_date",
        "from_amount",
        "to_amount",
        "status",
    )

    from_date: str | None = None  # YYYYMMDD
    to_date: str | None = None    # YYYYMMDD
    from_amount: Decimal | int | float | str | None = None
    to_amount: Decimal | int | float | str | None = None
    status: str | None = None

    @model_validator(mode="before")
    @classmethod
    def check_dates(cls, data: Any) -> Any:
        """Solo se valida el tipo de las fechas, no su formato ni el rango."""
        if not isinstance(data, dict):
            return data

        for name in ("from_date", "to_date"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise PayWayValidationError(
                    f"{name} must be a string in YYYYMMDD format",
                    field=name,
                )

        return data

    def hash_values(self) -> list[str]:
        return [stringify(getattr(self, name)) for name in self.FIELDS]

    def body_fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}
