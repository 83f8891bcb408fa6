"""Tag updates on existing payment resources.

Resources are immutable to this model except for their tags. A patch
replaces the tag mapping wholesale; keys missing from the patch are
dropped rather than kept.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..config import get_settings
from ..models.enums import PATCHABLE_PAYMENT_TYPES, PaymentType
from ..models.errors import (
    ErrorCode,
    FieldError,
    RequestValidationError,
    field_errors_from_pydantic,
)
from ..models.payment import PAYMENT_MODELS, PaymentVariant
from ..models.requests import PatchPaymentRequest
from ..utils.logging import log_model_operation

logger = logging.getLogger(__name__)


def _reject(exc: RequestValidationError, resource: Any = None) -> RequestValidationError:
    if get_settings().log_rejections:
        log_model_operation(
            logger,
            "apply_patch",
            payment_type=getattr(resource, "type", None),
            payment_id=getattr(resource, "id", None),
            error_code=exc.code.value,
            error=str(exc),
        )
    return exc


def _error(code: ErrorCode, path: str, constraint: str, message: str) -> RequestValidationError:
    return RequestValidationError(
        code, [FieldError(path=path, constraint=constraint, message=message)]
    )


def apply_patch(
    resource: PaymentVariant,
    patch: PatchPaymentRequest | Mapping[str, Any],
) -> PaymentVariant:
    """Return a copy of ``resource`` with its tags replaced by the patch's.

    Args:
        resource: A parsed payment
        patch: A PatchPaymentRequest, or its raw ``{"type", "attributes"}``
            form

    Returns:
        A new resource of the same variant; every field other than
        ``attributes.tags`` is unchanged.

    Raises:
        RequestValidationError: If the resource is a wire or bill payment
            (whatever the patch contains), the patch is malformed, or its
            type differs from the resource's.
    """
    if not isinstance(resource, tuple(PAYMENT_MODELS.values())):
        raise _reject(
            _error(
                ErrorCode.INVALID_REQUEST,
                "",
                "payment_resource",
                f"patch target must be a parsed payment, got {type(resource).__name__}",
            )
        )

    if PaymentType(resource.type) not in PATCHABLE_PAYMENT_TYPES:
        raise _reject(
            _error(
                ErrorCode.NOT_PATCHABLE,
                "type",
                "patchable_type",
                f"{resource.type} resources are immutable once created",
            ),
            resource,
        )

    if not isinstance(patch, PatchPaymentRequest):
        try:
            patch = PatchPaymentRequest.model_validate(patch)
        except ValidationError as exc:
            raise _reject(
                RequestValidationError(
                    ErrorCode.INVALID_REQUEST, field_errors_from_pydantic(exc)
                ),
                resource,
            ) from exc

    if patch.type != resource.type:
        raise _reject(
            _error(
                ErrorCode.PATCH_TYPE_MISMATCH,
                "type",
                "discriminator_mismatch",
                f"patch type {patch.type} does not match resource type {resource.type}",
            ),
            resource,
        )

    # Full replace of the tag mapping
    attributes = resource.attributes.model_copy(
        update={"tags": dict(patch.attributes.tags)}
    )
    patched = resource.model_copy(update={"attributes": attributes})

    log_model_operation(
        logger,
        "apply_patch",
        payment_type=resource.type,
        payment_id=resource.id,
        tag_count=len(patch.attributes.tags),
    )
    return patched
