"""Error codes and exceptions for the payment data model.

Every failure is raised synchronously as a ``PaymentModelError`` subclass
carrying field-addressable details. Nothing is retried.
"""

from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


class ErrorCode(str, Enum):
    """Stable error codes for model failures."""

    # Inbound resource errors (ERR_SCHEMA_001-ERR_SCHEMA_003)
    MALFORMED_RESOURCE = "ERR_SCHEMA_001"
    UNKNOWN_RESOURCE_TYPE = "ERR_SCHEMA_002"
    CONFLICTING_RESOURCE_FIELDS = "ERR_SCHEMA_003"

    # Outbound request errors (ERR_REQUEST_001-ERR_REQUEST_005)
    INVALID_REQUEST = "ERR_REQUEST_001"
    UNKNOWN_REQUEST_TYPE = "ERR_REQUEST_002"
    COUNTERPARTY_SPECIFICATION = "ERR_REQUEST_003"
    NOT_PATCHABLE = "ERR_REQUEST_004"
    PATCH_TYPE_MISMATCH = "ERR_REQUEST_005"

    # Narrowing errors
    TYPE_MISMATCH = "ERR_TYPE_001"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MALFORMED_RESOURCE: "Payment resource does not match its schema",
    ErrorCode.UNKNOWN_RESOURCE_TYPE: "Payment resource type is missing or not recognized",
    ErrorCode.CONFLICTING_RESOURCE_FIELDS: "Payment resource sets mutually exclusive fields",
    ErrorCode.INVALID_REQUEST: "Payment request does not match its schema",
    ErrorCode.UNKNOWN_REQUEST_TYPE: "Payment request type is missing or not recognized",
    ErrorCode.COUNTERPARTY_SPECIFICATION: (
        "ACH payment request must specify the counterparty exactly one way"
    ),
    ErrorCode.NOT_PATCHABLE: "Payment resource cannot be patched",
    ErrorCode.PATCH_TYPE_MISMATCH: "Patch type does not match the payment resource type",
    ErrorCode.TYPE_MISMATCH: "Payment resource is not of the expected type",
}

# Recovery suggestions for callers
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.MALFORMED_RESOURCE: "Check the upstream API version and the listed fields",
    ErrorCode.UNKNOWN_RESOURCE_TYPE: "Check the upstream API version; new payment types need a model",
    ErrorCode.CONFLICTING_RESOURCE_FIELDS: "Report the resource to the banking backend",
    ErrorCode.INVALID_REQUEST: "Fix the listed fields and build the request again",
    ErrorCode.UNKNOWN_REQUEST_TYPE: "Use one of achPayment, bookPayment or wirePayment",
    ErrorCode.COUNTERPARTY_SPECIFICATION: (
        "Provide an inline counterparty, a counterparty relationship "
        "or a plaidProcessorToken, and only one of them"
    ),
    ErrorCode.NOT_PATCHABLE: "Only ACH, book and received ACH payments accept tag updates",
    ErrorCode.PATCH_TYPE_MISMATCH: "Build the patch with the resource's own type",
    ErrorCode.TYPE_MISMATCH: "Dispatch on the resource type before narrowing",
}


class FieldError(BaseModel):
    """A single constraint violation, addressed by wire field path."""

    model_config = ConfigDict(strict=True, frozen=True)

    path: str = Field(
        ...,
        description="Dotted path to the offending field, using wire names",
        examples=["attributes.amount"],
    )
    constraint: str = Field(
        ...,
        description="Machine-readable constraint identifier",
        examples=["greater_than"],
    )
    message: str = Field(
        ...,
        description="Human-readable description of the constraint",
        examples=["Input should be greater than 0"],
    )


class ErrorResponse(BaseModel):
    """Serializable form of a model error for API or log output."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    errors: list[FieldError] = Field(default_factory=list)


def format_path(loc: Iterable[Any]) -> str:
    """Join a location tuple into a dotted path."""
    return ".".join(str(part) for part in loc)


def field_errors_from_pydantic(
    exc: PydanticValidationError,
    *,
    drop_prefix: tuple[Any, ...] = (),
) -> list[FieldError]:
    """Convert pydantic validation errors to FieldErrors.

    Args:
        exc: The pydantic ValidationError
        drop_prefix: Leading location parts to strip (e.g. the union tag)

    Returns:
        One FieldError per pydantic error, in reporting order.
    """
    errors = []
    for error in exc.errors(include_url=False):
        loc = tuple(error.get("loc", ()))
        if drop_prefix and loc[: len(drop_prefix)] == drop_prefix:
            loc = loc[len(drop_prefix) :]
        errors.append(
            FieldError(
                path=format_path(loc),
                constraint=error.get("type", ""),
                message=error.get("msg", ""),
            )
        )
    return errors


class PaymentModelError(Exception):
    """Base exception for payment model failures."""

    def __init__(
        self,
        code: ErrorCode,
        errors: Optional[list[FieldError]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.errors = list(errors or [])
        super().__init__(self._describe())

    def _describe(self) -> str:
        if not self.errors:
            return self.message
        details = "; ".join(
            f"{error.path or '<root>'}: {error.message}" for error in self.errors
        )
        return f"{self.message} ({details})"

    @property
    def paths(self) -> list[str]:
        """Paths of all offending fields."""
        return [error.path for error in self.errors]

    def prefixed(self, prefix: str) -> "PaymentModelError":
        """Return a copy of this error with every path nested under ``prefix``."""
        errors = [
            error.model_copy(
                update={"path": f"{prefix}.{error.path}" if error.path else prefix}
            )
            for error in self.errors
        ]
        return type(self)(self.code, errors)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to a serializable ErrorResponse."""
        return ErrorResponse(
            error_code=self.code,
            message=self.message,
            recovery=self.recovery,
            errors=self.errors,
        )


class SchemaError(PaymentModelError):
    """Inbound resource is malformed, incomplete or of an unknown type."""


class RequestValidationError(PaymentModelError):
    """Outbound request violates a structural or exclusivity constraint."""


class TypeMismatchError(PaymentModelError):
    """A payment was narrowed to a variant it does not belong to."""
