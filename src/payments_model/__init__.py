"""Payment resource and request data contracts for the banking API.

Typical use from a transport layer:

    from payments_model import build_request, parse_document

    request = build_request("wirePayment", attributes, relationships)
    body = request.to_json_body()
    ...
    payment = parse_document(response.json())
"""

from .models import (
    AchPayment,
    AchReceivedPayment,
    BillPayment,
    BookPayment,
    CreateBookPaymentRequest,
    CreateInlinePaymentRequest,
    CreateLinkedPaymentRequest,
    CreatePaymentRequest,
    CreateVerifiedPaymentRequest,
    CreateWirePaymentRequest,
    Direction,
    ErrorCode,
    FieldError,
    PatchPaymentRequest,
    Payment,
    PaymentModelError,
    PaymentStatus,
    PaymentType,
    ReceivedPaymentStatus,
    RequestValidationError,
    SchemaError,
    TypeMismatchError,
    WirePayment,
)
from .services import (
    apply_patch,
    build_request,
    dispatch,
    narrow,
    parse_document,
    parse_resource,
)

__version__ = "0.1.0"

__all__ = [
    "AchPayment",
    "AchReceivedPayment",
    "BillPayment",
    "BookPayment",
    "CreateBookPaymentRequest",
    "CreateInlinePaymentRequest",
    "CreateLinkedPaymentRequest",
    "CreatePaymentRequest",
    "CreateVerifiedPaymentRequest",
    "CreateWirePaymentRequest",
    "Direction",
    "ErrorCode",
    "FieldError",
    "PatchPaymentRequest",
    "Payment",
    "PaymentModelError",
    "PaymentStatus",
    "PaymentType",
    "ReceivedPaymentStatus",
    "RequestValidationError",
    "SchemaError",
    "TypeMismatchError",
    "WirePayment",
    "apply_patch",
    "build_request",
    "dispatch",
    "narrow",
    "parse_document",
    "parse_resource",
]
