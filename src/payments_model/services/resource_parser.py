"""Parsing, narrowing and dispatch of inbound payment resources.

Raw JSON from the banking API is turned into one of the five payment
variants. An unknown ``type`` always fails; nothing falls back to a default
variant.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar, overload

from pydantic import TypeAdapter, ValidationError

from ..config import get_settings
from ..models.enums import PaymentType
from ..models.errors import (
    ErrorCode,
    FieldError,
    SchemaError,
    TypeMismatchError,
    field_errors_from_pydantic,
)
from ..models.payment import (
    PAYMENT_MODELS,
    AchPayment,
    AchReceivedPayment,
    BillPayment,
    BookPayment,
    Payment,
    PaymentVariant,
    WirePayment,
)
from ..models.rules import RESOURCE_RULES, check_rules
from ..utils.logging import log_model_operation

logger = logging.getLogger(__name__)

_PAYMENT_ADAPTER: TypeAdapter[Payment] = TypeAdapter(Payment)

PaymentT = TypeVar("PaymentT", bound=PaymentVariant)
ResultT = TypeVar("ResultT")


def _reject(exc: SchemaError, operation: str, payment_type: str | None = None) -> SchemaError:
    if get_settings().log_rejections:
        log_model_operation(
            logger,
            operation,
            payment_type=payment_type,
            error_code=exc.code.value,
            error=str(exc),
        )
    return exc


def _resolve_type(raw: Mapping[str, Any]) -> PaymentType:
    value = raw.get("type")
    try:
        return PaymentType(value)
    except ValueError:
        known = ", ".join(t.value for t in PaymentType)
        raise SchemaError(
            ErrorCode.UNKNOWN_RESOURCE_TYPE,
            [
                FieldError(
                    path="type",
                    constraint="missing" if value is None else "unknown_discriminator",
                    message=f"type must be one of {known}, got {value!r}",
                )
            ],
        ) from None


def parse_resource(raw: Any) -> Payment:
    """Validate a raw resource object and return its concrete variant.

    Args:
        raw: A decoded JSON resource object (``{"id", "type", "attributes",
            "relationships"}``)

    Returns:
        The AchPayment, BookPayment, WirePayment, BillPayment or
        AchReceivedPayment the object describes.

    Raises:
        SchemaError: If the type is unknown, exclusive fields are both set,
            or any field violates its constraint. ``errors`` lists every
            offending field path.
    """
    if not isinstance(raw, Mapping):
        raise _reject(
            SchemaError(
                ErrorCode.MALFORMED_RESOURCE,
                [
                    FieldError(
                        path="",
                        constraint="object_type",
                        message=f"resource must be a JSON object, got {type(raw).__name__}",
                    )
                ],
            ),
            "parse_resource",
        )

    try:
        payment_type = _resolve_type(raw)
    except SchemaError as exc:
        raise _reject(exc, "parse_resource") from None

    violation = check_rules(RESOURCE_RULES[payment_type], raw)
    if violation is not None:
        code, errors = violation
        raise _reject(SchemaError(code, errors), "parse_resource", payment_type.value)

    try:
        payment = _PAYMENT_ADAPTER.validate_python(dict(raw))
    except ValidationError as exc:
        errors = field_errors_from_pydantic(exc, drop_prefix=(payment_type.value,))
        raise _reject(
            SchemaError(ErrorCode.MALFORMED_RESOURCE, errors),
            "parse_resource",
            payment_type.value,
        ) from exc

    log_model_operation(
        logger, "parse_resource", payment_type=payment.type, payment_id=payment.id
    )
    return payment


def parse_document(raw: Any) -> Payment | list[Payment]:
    """Parse a JSON:API response document ``{"data": ...}``.

    Args:
        raw: Decoded response body whose ``data`` is a resource or a list of
            resources. Other top-level members (``included``, ``meta``) are
            ignored.

    Returns:
        A single payment, or a list in document order.

    Raises:
        SchemaError: If ``data`` is missing or any resource is invalid. Paths
            of list elements are prefixed with ``data.<index>``.
    """
    if not isinstance(raw, Mapping) or "data" not in raw:
        raise _reject(
            SchemaError(
                ErrorCode.MALFORMED_RESOURCE,
                [
                    FieldError(
                        path="data",
                        constraint="missing",
                        message="response document must contain a data member",
                    )
                ],
            ),
            "parse_document",
        )

    data = raw["data"]
    if not isinstance(data, list):
        try:
            return parse_resource(data)
        except SchemaError as exc:
            raise exc.prefixed("data") from exc

    payments = []
    for index, item in enumerate(data):
        try:
            payments.append(parse_resource(item))
        except SchemaError as exc:
            raise exc.prefixed(f"data.{index}") from exc
    return payments


def _tag_of(expected_type: Any) -> PaymentType:
    if isinstance(expected_type, type):
        for payment_type, model in PAYMENT_MODELS.items():
            if model is expected_type:
                return payment_type
    else:
        try:
            return PaymentType(expected_type)
        except ValueError:
            pass
    raise TypeMismatchError(
        ErrorCode.TYPE_MISMATCH,
        [
            FieldError(
                path="type",
                constraint="unknown_discriminator",
                message=f"{expected_type!r} is not a payment type",
            )
        ],
    )


@overload
def narrow(resource: Any, expected_type: type[PaymentT]) -> PaymentT: ...


@overload
def narrow(resource: Any, expected_type: str | PaymentType) -> PaymentVariant: ...


def narrow(resource: Any, expected_type: Any) -> PaymentVariant:
    """Safely downcast a payment to the variant named by ``expected_type``.

    Only the ``type`` tag is compared.

    Args:
        resource: A parsed payment
        expected_type: A variant class, a PaymentType, or its wire value

    Returns:
        The same resource, typed as the expected variant.

    Raises:
        TypeMismatchError: If the resource carries a different tag, or
            ``expected_type`` is not a payment type.
    """
    tag = _tag_of(expected_type)
    actual = getattr(resource, "type", None)
    if not isinstance(resource, tuple(PAYMENT_MODELS.values())) or actual != tag.value:
        raise TypeMismatchError(
            ErrorCode.TYPE_MISMATCH,
            [
                FieldError(
                    path="type",
                    constraint="discriminator_mismatch",
                    message=f"expected {tag.value}, got {actual!r}",
                )
            ],
        )
    return resource


def dispatch(
    payment: PaymentVariant,
    *,
    ach_payment: Callable[[AchPayment], ResultT],
    book_payment: Callable[[BookPayment], ResultT],
    wire_payment: Callable[[WirePayment], ResultT],
    bill_payment: Callable[[BillPayment], ResultT],
    ach_received_payment: Callable[[AchReceivedPayment], ResultT],
) -> ResultT:
    """Call the handler for the payment's variant.

    Every handler is a required keyword so that callers handle each variant
    explicitly.
    """
    handlers: dict[PaymentType, Callable[[Any], ResultT]] = {
        PaymentType.ACH_PAYMENT: ach_payment,
        PaymentType.BOOK_PAYMENT: book_payment,
        PaymentType.WIRE_PAYMENT: wire_payment,
        PaymentType.BILL_PAYMENT: bill_payment,
        PaymentType.ACH_RECEIVED_PAYMENT: ach_received_payment,
    }
    payment_type = _tag_of(getattr(payment, "type", None))
    return handlers[payment_type](narrow(payment, payment_type))
