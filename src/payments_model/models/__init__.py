"""Pydantic models for payment resources and payment requests."""

from .common import (
    Address,
    Counterparty,
    PaymentModelBase,
    Relationship,
    WireCounterparty,
)
from .enums import (
    CREATABLE_PAYMENT_TYPES,
    PATCHABLE_PAYMENT_TYPES,
    PAYMENT_STATUS_TRANSITIONS,
    RECEIVED_PAYMENT_STATUS_TRANSITIONS,
    AccountType,
    Direction,
    PaymentStatus,
    PaymentType,
    ReceivedPaymentStatus,
    can_transition,
    is_terminal,
)
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    ErrorCode,
    ErrorResponse,
    FieldError,
    PaymentModelError,
    RequestValidationError,
    SchemaError,
    TypeMismatchError,
)
from .payment import (
    PAYMENT_MODELS,
    AchPayment,
    AchReceivedPayment,
    BillPayment,
    BookPayment,
    OriginatedPayment,
    Payment,
    PaymentVariant,
    WirePayment,
)
from .requests import (
    CreateBookPaymentRequest,
    CreateInlinePaymentRequest,
    CreateLinkedPaymentRequest,
    CreatePaymentRequest,
    CreateVerifiedPaymentRequest,
    CreateWirePaymentRequest,
    PatchPaymentRequest,
)

__all__ = [
    # Enums
    "AccountType",
    "Direction",
    "PaymentStatus",
    "PaymentType",
    "ReceivedPaymentStatus",
    "CREATABLE_PAYMENT_TYPES",
    "PATCHABLE_PAYMENT_TYPES",
    "PAYMENT_STATUS_TRANSITIONS",
    "RECEIVED_PAYMENT_STATUS_TRANSITIONS",
    "can_transition",
    "is_terminal",
    # Common
    "Address",
    "Counterparty",
    "PaymentModelBase",
    "Relationship",
    "WireCounterparty",
    # Resources
    "AchPayment",
    "AchReceivedPayment",
    "BillPayment",
    "BookPayment",
    "OriginatedPayment",
    "Payment",
    "PaymentVariant",
    "PAYMENT_MODELS",
    "WirePayment",
    # Requests
    "CreateBookPaymentRequest",
    "CreateInlinePaymentRequest",
    "CreateLinkedPaymentRequest",
    "CreatePaymentRequest",
    "CreateVerifiedPaymentRequest",
    "CreateWirePaymentRequest",
    "PatchPaymentRequest",
    # Errors
    "ErrorCode",
    "ErrorResponse",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "FieldError",
    "PaymentModelError",
    "RequestValidationError",
    "SchemaError",
    "TypeMismatchError",
]
