"""
Utilidades del cliente de PayWay.
"""

from payway.utils.encoding import (
    base64_encode,
    encode_structured,
    stringify,
    to_json,
    trim,
)
from payway.utils.exceptions import (
    GatewayError,
    GatewayTransportError,
    PayWayError,
    PayWayRequestError,
    PayWayValidationError,
)
from payway.utils.hmac_utils import (
    PayloadSigner,
    build_signed_fields,
    create_hash,
    filter_present,
    format_req_time,
    verify_hash,
)

__all__ = [
    # Encoding
    "trim",
    "base64_encode",
    "encode_structured",
    "stringify",
    "to_json",
    # HMAC
    "PayloadSigner",
    "create_hash",
    "verify_hash",
    "format_req_time",
    "filter_present",
    "build_signed_fields",
    # Exceptions
    "PayWayError",
    "PayWayRequestError",
    "PayWayValidationError",
    "GatewayError",
    "GatewayTransportError",
]
