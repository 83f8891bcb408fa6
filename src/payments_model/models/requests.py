"""Request payload models for creating and patching payments.

Request shapes are deliberately asymmetric from the resources they
produce: the counterparty is supplied inline, by reference, or through a
Plaid processor token, and only the originating account is referenced.
"""

from typing import Any, Literal, Union

from pydantic import Field, StrictBool, StrictStr

from .common import (
    AchDescription,
    Addenda,
    Amount,
    Counterparty,
    PaymentModelBase,
    Relationship,
    Tags,
    WireCounterparty,
    WireDescription,
)
from .enums import Direction


class JsonApiRequest(PaymentModelBase):
    """Serialization of request models into JSON:API request bodies."""

    def to_json_body(self) -> dict[str, Any]:
        """Build the ``{"data": {...}}`` body sent to the API.

        Relationships are wrapped in their own ``data`` envelope and absent
        optional attributes are omitted.
        """
        data = self.to_json()
        relationships = data.get("relationships")
        if relationships is not None:
            data["relationships"] = {
                key: {"data": value} for key, value in relationships.items()
            }
        return {"data": data}


# === Shared relationship shapes ===


class AccountRelationships(PaymentModelBase):
    """The deposit account originating the payment."""

    account: Relationship


class BookRequestRelationships(PaymentModelBase):
    account: Relationship
    counterparty_account: Relationship = Field(
        ..., description="The account the payment is made to"
    )


class LinkedRequestRelationships(PaymentModelBase):
    account: Relationship
    counterparty: Relationship = Field(
        ..., description="Stored counterparty the payment is made to"
    )


# === Wire ===


class CreateWirePaymentAttributes(PaymentModelBase):
    amount: Amount = Field(..., description="Amount in cents")
    description: WireDescription
    counterparty: WireCounterparty
    idempotency_key: StrictStr | None = None
    tags: Tags | None = Field(
        default=None,
        description="Tags copied to any transaction this payment creates",
    )


class CreateWirePaymentRequest(JsonApiRequest):
    """Create a wire payment to an inline counterparty."""

    type: Literal["wirePayment"] = "wirePayment"
    attributes: CreateWirePaymentAttributes
    relationships: AccountRelationships


# === Book ===


class CreateBookPaymentAttributes(PaymentModelBase):
    amount: Amount
    direction: Direction | None = Field(
        default=None, description="Debit or Credit; the API decides when absent"
    )
    description: WireDescription
    idempotency_key: StrictStr | None = None
    tags: Tags | None = None


class CreateBookPaymentRequest(JsonApiRequest):
    """Create a book payment to another account on the platform."""

    type: Literal["bookPayment"] = "bookPayment"
    attributes: CreateBookPaymentAttributes
    relationships: BookRequestRelationships


# === ACH ===


class CreateInlinePaymentAttributes(PaymentModelBase):
    amount: Amount
    direction: Direction
    counterparty: Counterparty
    description: AchDescription
    addenda: Addenda | None = None
    idempotency_key: StrictStr | None = None
    verify_counterparty_balance: StrictBool | None = Field(
        default=None,
        description=(
            "Verify the counterparty balance; on failure the payment is "
            "Rejected with reason CounterpartyInsufficientFunds"
        ),
    )
    tags: Tags | None = None


class CreateInlinePaymentRequest(JsonApiRequest):
    """Create an ACH payment with the counterparty given inline."""

    type: Literal["achPayment"] = "achPayment"
    attributes: CreateInlinePaymentAttributes
    relationships: AccountRelationships


class CreateLinkedPaymentAttributes(PaymentModelBase):
    amount: Amount
    direction: Direction
    description: AchDescription
    addenda: Addenda | None = None
    idempotency_key: StrictStr | None = None
    verify_counterparty_balance: StrictBool | None = Field(
        default=None,
        description=(
            "Verify the counterparty balance; on failure the payment is "
            "Rejected with reason CounterpartyInsufficientFunds"
        ),
    )
    tags: Tags | None = None


class CreateLinkedPaymentRequest(JsonApiRequest):
    """Create an ACH payment to a stored counterparty."""

    type: Literal["achPayment"] = "achPayment"
    attributes: CreateLinkedPaymentAttributes
    relationships: LinkedRequestRelationships


class CreateVerifiedPaymentAttributes(PaymentModelBase):
    amount: Amount
    direction: Direction
    description: AchDescription
    idempotency_key: StrictStr | None = None
    counterparty_name: StrictStr | None = Field(
        default=None,
        description="Name of the person or company that owns the counterparty account",
    )
    verify_counterparty_balance: StrictBool | None = None
    plaid_processor_token: StrictStr = Field(
        ...,
        min_length=1,
        description="Plaid processor token for the counterparty account",
    )


class CreateVerifiedPaymentRequest(JsonApiRequest):
    """Create an ACH payment to an account verified through Plaid."""

    type: Literal["achPayment"] = "achPayment"
    attributes: CreateVerifiedPaymentAttributes
    relationships: AccountRelationships


# The three ACH shapes share a tag; they differ only in how the
# counterparty is specified, so this union is resolved by the rule table
CreatePaymentRequest = Union[
    CreateWirePaymentRequest,
    CreateBookPaymentRequest,
    CreateInlinePaymentRequest,
    CreateLinkedPaymentRequest,
    CreateVerifiedPaymentRequest,
]


# === Patch ===


class PatchPaymentAttributes(PaymentModelBase):
    tags: Tags


class PatchPaymentRequest(JsonApiRequest):
    """Update the tags of an ACH, book or received ACH payment."""

    type: Literal["achPayment", "bookPayment", "achReceivedPayment"]
    attributes: PatchPaymentAttributes
