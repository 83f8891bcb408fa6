"""Construction of create-payment requests from loose attribute mappings."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..config import get_settings
from ..models.enums import CREATABLE_PAYMENT_TYPES, PaymentType
from ..models.errors import (
    ErrorCode,
    FieldError,
    RequestValidationError,
    field_errors_from_pydantic,
)
from ..models.requests import CreatePaymentRequest
from ..models.rules import (
    ACH_REQUEST_MODELS,
    REQUEST_MODELS,
    REQUEST_RULES,
    check_rules,
)
from ..utils.logging import log_model_operation

logger = logging.getLogger(__name__)


def _reject(exc: RequestValidationError, payment_type: str | None = None) -> RequestValidationError:
    if get_settings().log_rejections:
        log_model_operation(
            logger,
            "build_request",
            payment_type=payment_type,
            error_code=exc.code.value,
            error=str(exc),
        )
    return exc


def _resolve_request_type(variant: Any) -> PaymentType:
    try:
        payment_type = PaymentType(variant)
    except ValueError:
        payment_type = None

    if payment_type not in CREATABLE_PAYMENT_TYPES:
        allowed = ", ".join(sorted(t.value for t in CREATABLE_PAYMENT_TYPES))
        raise _reject(
            RequestValidationError(
                ErrorCode.UNKNOWN_REQUEST_TYPE,
                [
                    FieldError(
                        path="type",
                        constraint="missing" if variant is None else "unknown_discriminator",
                        message=f"type must be one of {allowed}, got {variant!r}",
                    )
                ],
            )
        )
    return payment_type


def _as_section(value: Any, name: str, payment_type: PaymentType) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _reject(
            RequestValidationError(
                ErrorCode.INVALID_REQUEST,
                [
                    FieldError(
                        path=name,
                        constraint="object_type",
                        message=f"{name} must be a mapping, got {type(value).__name__}",
                    )
                ],
            ),
            payment_type.value,
        )
    return dict(value)


def build_request(
    variant: str | PaymentType,
    attributes: Mapping[str, Any] | None,
    relationships: Mapping[str, Any] | None = None,
) -> CreatePaymentRequest:
    """Validate request data and build the matching create-payment request.

    For ``achPayment`` the request shape is chosen by how the counterparty
    is specified: an inline ``counterparty`` attribute builds a
    CreateInlinePaymentRequest, a ``counterparty`` relationship a
    CreateLinkedPaymentRequest, and a ``plaidProcessorToken`` attribute a
    CreateVerifiedPaymentRequest. Exactly one must be given.

    Args:
        variant: Discriminator of the payment to create (achPayment,
            bookPayment or wirePayment)
        attributes: Request attributes, by wire or Python name
        relationships: Relationship references (``{"type", "id"}`` or the
            JSON:API envelope)

    Returns:
        The validated request model.

    Raises:
        RequestValidationError: If the discriminator is unknown or missing,
            the counterparty is specified zero or several ways, a required
            relationship is missing, or any field violates its constraint.
    """
    payment_type = _resolve_request_type(variant)
    raw = {
        "type": payment_type.value,
        "attributes": _as_section(attributes, "attributes", payment_type),
        "relationships": _as_section(relationships, "relationships", payment_type),
    }

    violation = check_rules(REQUEST_RULES[payment_type], raw)
    if violation is not None:
        code, errors = violation
        raise _reject(RequestValidationError(code, errors), payment_type.value)

    if payment_type == PaymentType.ACH_PAYMENT:
        mechanism = next(ref for ref in ACH_REQUEST_MODELS if ref.is_present(raw))
        model = ACH_REQUEST_MODELS[mechanism]
    else:
        model = REQUEST_MODELS[payment_type]

    try:
        request = model.model_validate(raw)
    except ValidationError as exc:
        raise _reject(
            RequestValidationError(
                ErrorCode.INVALID_REQUEST, field_errors_from_pydantic(exc)
            ),
            payment_type.value,
        ) from exc

    log_model_operation(
        logger,
        "build_request",
        payment_type=payment_type.value,
        request_model=type(request).__name__,
    )
    return request
