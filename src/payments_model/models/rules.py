"""Mutual-exclusivity rules keyed by payment discriminator.

Structural typing cannot express "at most one of" or "exactly one of"
across attributes and relationships, so those constraints are checked
against the raw payload from this table before model validation.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic.alias_generators import to_snake

from .enums import PaymentType
from .errors import ErrorCode, FieldError
from .requests import (
    CreateBookPaymentRequest,
    CreateInlinePaymentRequest,
    CreateLinkedPaymentRequest,
    CreatePaymentRequest,
    CreateVerifiedPaymentRequest,
    CreateWirePaymentRequest,
)


@dataclass(frozen=True)
class FieldRef:
    """A key inside the ``attributes`` or ``relationships`` section."""

    section: str
    key: str

    @property
    def path(self) -> str:
        return f"{self.section}.{self.key}"

    def is_present(self, raw: Mapping[str, Any]) -> bool:
        """A field is present when its key exists with a non-null value.

        Both the wire name and the Python attribute name are recognised. An
        empty JSON:API relationship ``{"data": null}`` counts as absent.
        """
        section = raw.get(self.section)
        if not isinstance(section, Mapping):
            return False
        return any(
            _has_value(section.get(key)) for key in (self.key, to_snake(self.key))
        )


def _has_value(value: Any) -> bool:
    if isinstance(value, Mapping) and set(value) == {"data"}:
        return value["data"] is not None
    return value is not None


@dataclass(frozen=True)
class ExclusiveRule:
    """At most one (or exactly one) of ``fields`` may be present."""

    fields: tuple[FieldRef, ...]
    code: ErrorCode
    exactly_one: bool = False

    def violations(self, raw: Mapping[str, Any]) -> list[FieldError]:
        """Return one FieldError per offending field, or an empty list."""
        present = [ref for ref in self.fields if ref.is_present(raw)]
        names = ", ".join(ref.path for ref in self.fields)

        if len(present) > 1:
            others = ", ".join(ref.path for ref in present)
            return [
                FieldError(
                    path=ref.path,
                    constraint="mutually_exclusive",
                    message=f"only one of {others} may be set",
                )
                for ref in present
            ]
        if self.exactly_one and not present:
            return [
                FieldError(
                    path=ref.path,
                    constraint="exactly_one_required",
                    message=f"exactly one of {names} is required",
                )
                for ref in self.fields
            ]
        return []


CUSTOMER = FieldRef("relationships", "customer")
CUSTOMERS = FieldRef("relationships", "customers")

INLINE_COUNTERPARTY = FieldRef("attributes", "counterparty")
LINKED_COUNTERPARTY = FieldRef("relationships", "counterparty")
PLAID_PROCESSOR_TOKEN = FieldRef("attributes", "plaidProcessorToken")

# An account belongs to one customer or to several joint owners, never both
SINGLE_OR_JOINT_OWNER = ExclusiveRule(
    fields=(CUSTOMER, CUSTOMERS),
    code=ErrorCode.CONFLICTING_RESOURCE_FIELDS,
)

ACH_COUNTERPARTY_SPECIFICATION = ExclusiveRule(
    fields=(INLINE_COUNTERPARTY, LINKED_COUNTERPARTY, PLAID_PROCESSOR_TOKEN),
    code=ErrorCode.COUNTERPARTY_SPECIFICATION,
    exactly_one=True,
)

RESOURCE_RULES: dict[PaymentType, tuple[ExclusiveRule, ...]] = {
    PaymentType.ACH_PAYMENT: (SINGLE_OR_JOINT_OWNER,),
    PaymentType.BOOK_PAYMENT: (SINGLE_OR_JOINT_OWNER,),
    PaymentType.WIRE_PAYMENT: (SINGLE_OR_JOINT_OWNER,),
    PaymentType.BILL_PAYMENT: (SINGLE_OR_JOINT_OWNER,),
    # customers is not part of the received payment shape at all
    PaymentType.ACH_RECEIVED_PAYMENT: (),
}

REQUEST_RULES: dict[PaymentType, tuple[ExclusiveRule, ...]] = {
    PaymentType.ACH_PAYMENT: (ACH_COUNTERPARTY_SPECIFICATION,),
    PaymentType.BOOK_PAYMENT: (),
    PaymentType.WIRE_PAYMENT: (),
}

# Request model per discriminator, for tags with a single request shape
REQUEST_MODELS: dict[PaymentType, type[CreatePaymentRequest]] = {
    PaymentType.BOOK_PAYMENT: CreateBookPaymentRequest,
    PaymentType.WIRE_PAYMENT: CreateWirePaymentRequest,
}

# ACH request model per counterparty specification mechanism
ACH_REQUEST_MODELS: dict[FieldRef, type[CreatePaymentRequest]] = {
    INLINE_COUNTERPARTY: CreateInlinePaymentRequest,
    LINKED_COUNTERPARTY: CreateLinkedPaymentRequest,
    PLAID_PROCESSOR_TOKEN: CreateVerifiedPaymentRequest,
}


def check_rules(
    rules: tuple[ExclusiveRule, ...], raw: Mapping[str, Any]
) -> tuple[ErrorCode, list[FieldError]] | None:
    """Evaluate rules in order and report the first one violated.

    Returns:
        The violated rule's error code with its field errors, or None.
    """
    for rule in rules:
        errors = rule.violations(raw)
        if errors:
            return rule.code, errors
    return None
